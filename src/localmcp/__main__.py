from localmcp.cli import main

main()
