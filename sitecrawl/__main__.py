from sitecrawl.cli import run

run()
