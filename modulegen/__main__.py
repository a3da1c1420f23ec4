from modulegen.cli import main

main()
