from .sheep_client import main

main()
