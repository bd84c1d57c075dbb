from pricesync.cli import app

app(prog_name="pricesync")
