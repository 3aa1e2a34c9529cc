from filenotes.cli import main

main()
