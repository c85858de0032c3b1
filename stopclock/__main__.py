# stopclock/__main__.py
# Allow `python -m stopclock`

from .cli.app import app

if __name__ == "__main__":
    app()
