from srg.cli import app

app(prog_name="srg")
