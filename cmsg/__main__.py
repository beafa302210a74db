from cmsg.cli.main import run

run()
