from vaultnote.cli import cli

cli()
