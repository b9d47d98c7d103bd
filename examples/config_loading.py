"""config_loading.py"""

from aaparser.config import loader

app = loader("aaparser.yaml")

# python config_loading.py deploy -e staging api worker
if __name__ == "__main__":
    app.main()
