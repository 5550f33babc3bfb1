from imagecdn.app import main

main()
