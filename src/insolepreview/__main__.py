"""Command-line interface."""
from insolepreview.main import main

if __name__ == "__main__":
    main()
