from aaparser import Application
from aaparser.parser.utils import kv
from aaparser.utils import setup_logging
from aaparser.validators import int_range_validator

setup_logging()


def build(options, operands):
    print(f"Building {operands['targets']} with {options['jobs']} jobs")
    for key, value in options["define"].items():
        print(f"  {key} = {value}")


def test(options, operands):
    print(f"Testing (fail fast: {options['fail_fast']})")


def copy(options, operands):
    print(f"Copying {operands['files']} to {operands['dest']}")


app = Application("simple", description="Build, test and copy.", version="0.1.0")
app.add_option("-v", "--verbose", type="counter", help="Increase verbosity.")

build_cmd = app.add_command("build", "Build targets", action=build)
build_cmd.add_option(
    "-j",
    "--jobs",
    type="scalar",
    default="1",
    validators=[int_range_validator(1, 64)],
    help="Number of parallel jobs.",
)
build_cmd.add_option(
    "-D", "--define", type="scalar", coerce=kv, default={}, help="Set KEY=VALUE."
)
build_cmd.add_operand("targets", "+", help="Targets to build.")

test_cmd = app.add_command("test", "Run the test suite", action=test)
test_cmd.add_option("-x", "--fail-fast", help="Stop at the first failure.")

copy_cmd = app.add_command("copy", "Copy files", action=copy)
copy_cmd.add_operand("files", "*")
copy_cmd.add_operand("dest")

# python simple.py test -x build -j 4 -D mode=release lib app
# python simple.py copy a.txt b.txt out/
if __name__ == "__main__":
    app.main()
