from tileposter.app import main

main()
