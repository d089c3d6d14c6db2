from importlib.metadata import PackageNotFoundError, version

try:
    version = version("SeqParse")
except PackageNotFoundError:
    version = "0.0.0"
