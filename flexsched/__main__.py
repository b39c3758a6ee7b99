"""Entry point: python -m flexsched"""

from flexsched.cli.commands import app

if __name__ == "__main__":
    app()
