from ddg_search.cli.main import main

main()
