"""Entry point for 'python -m quillbase'."""

from quillbase.cli import main

if __name__ == "__main__":
    main()
