from wikisniffer.cli.app import app

app(prog_name="wikisniffer")
