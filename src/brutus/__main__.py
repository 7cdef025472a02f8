from brutus.cli.main import main

main()
