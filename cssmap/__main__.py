from cssmap.cli import main

main()
