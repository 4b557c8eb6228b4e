from reltag.cli.app import main

main()
