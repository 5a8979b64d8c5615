from .convert_sprite import main

main()
