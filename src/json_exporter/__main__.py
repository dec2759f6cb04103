from json_exporter.cli import run

run()
