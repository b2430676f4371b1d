from brainly.app import main

main()
