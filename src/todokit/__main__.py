from todokit.cli import main

main()
