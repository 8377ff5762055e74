from contactbook.ui.affordances import FormAffordances, affordances_for


def test_no_selection_only_allows_add():
    assert affordances_for(None) == FormAffordances(add=True, update=False, delete=False)
    assert affordances_for("") == FormAffordances(add=True, update=False, delete=False)


def test_selection_allows_update_and_delete():
    flags = affordances_for("abc123")
    assert flags.add is False
    assert flags.update is True
    assert flags.delete is True
    assert flags.clear is True
