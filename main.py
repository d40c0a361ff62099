import sys

from rich.pretty import pprint

from optable import *

settings = {"verbose": False, "output": "-", "inputs": []}


def on_output(state):
    settings["output"] = state.value


def on_verbose(state):
    settings["verbose"] = True


def on_input(state):
    if not state.value.endswith(".txt"):
        return 1
    settings["inputs"].append(state.value)


table = (
    OptionSpec("o", "output", metavar="FILE", descr="Write the result to FILE", default="stdout", hook=on_output),
    OptionSpec("v", "verbose", descr="Talk more", hook=on_verbose),
    OptionSpec(metavar="INPUT", descr="Text file to read", accepts="type::path", hook=on_input),
)

info = AppInfo(
    "main.py",
    version=(1, 0, 2),
    description="Echo the parsed settings of a tiny tool.",
    license="MIT",
    year=2024,
    author="optable contributors",
)


if __name__ == '__main__':
    if outcome := invoke(table, sys.argv, info=info):
        sys.exit(0 if outcome is Outcome.HANDLED else 1)
    pprint(settings)
