from dynui.cli import main

main()
