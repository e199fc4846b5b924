import sys

from rich.pretty import pprint

from clixxi import App

app = App("example_hello", "Simple app created by Clixxi.", "1.0")


def cmd1(context):
    print("opt1:", context.get("opt1", str))
    print("opt2:", context.get("opt2", bool, True))


def add(context):
    print(context.get("a", int) + context.get("b", int))


app.command("cmd1", "First command in this app.") \
    .option("opt1", "First option for this command") \
    .option("opt2", "Second option for this command") \
    .run(cmd1)

app.command("sum", "Add two integers.").option("a", "first addend").option("b", "second addend").run(add)


if __name__ == '__main__':
    if len(sys.argv) == 1:
        pprint(app)
    sys.exit(app.main())
