from csssweep.cli.main import cli

cli()
