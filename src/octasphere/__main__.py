from octasphere.cli import app

app(prog_name="octasphere")
