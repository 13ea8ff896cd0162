from aicommit.cli.main import main

main()
