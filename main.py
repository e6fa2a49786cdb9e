import sys

from rich.pretty import pprint

from argot import *

__prog__ = "demo"

verbose = Template("v", "verbose", descr="print more details")
output = Template("o", "output", min_values=1, max_values=1, value_name="FILE", descr="write the result to FILE")
show_help = Template("h", "help", descr="show this help and exit")
descriptor = Descriptor(
    "demo",
    templates=(verbose, output, show_help),
    groups=(Group(Template("j", "json", descr="emit json"), Template("y", "yaml", descr="emit yaml")),),
    max_args=3,
)


if __name__ == '__main__':
    command = try_parse(descriptor, sys.argv[1:])
    if isinstance(command, ParseError):
        trigger(command, shell=True)
    if command.has_option("help"):
        Formatter().print_help(descriptor, None, "Demonstrates the argot parsers.")
    else:
        pprint(command)
