"""Entry point for running the CLI."""
from form_filler.cli.main import main

if __name__ == "__main__":
    main()
