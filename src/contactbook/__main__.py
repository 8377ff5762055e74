from contactbook.app import cli

cli()
