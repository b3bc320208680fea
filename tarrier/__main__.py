from tarrier.main import main

main()
