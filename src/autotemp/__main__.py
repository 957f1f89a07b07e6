from autotemp.cli import main

main()
