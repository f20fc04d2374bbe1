from currency_converter.cli.main import app

app(prog_name="currency-converter")
