from dupdetect.cli import main

main()
