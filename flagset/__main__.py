"""
Demonstration program: declare a few flags, parse sys.argv, print the outcome.

    $ python -m flagset --port=9090 -d extra1 --mode slow
"""
from rich.console import Console

from flagset import FlagSet


def main(argv=None):
    flags = FlagSet("flagset", "A full demo for FlagSet", shell=True)

    port = flags.declare_int("port", 8080, "port to listen on")
    debug = flags.declare_bool("debug", False, "enable debug logging", "d")
    flags.declare_float("ratio", 1.0, "ratio for calculation")
    flags.declare_string("mode", "fast", "running mode")

    if argv is None:
        flags.run()
    else:
        flags.run(argv)

    console = Console()
    console.print("=== Final Configuration ===", style="bold")
    console.print("port  = %d" % port.get(int))
    console.print("debug = %s" % str(debug.get(bool)).lower())
    console.print("ratio = %s" % flags.get("ratio", float))
    console.print("mode  = %s" % flags.get("mode", str), markup=False)
    console.print("Which were set by user?")
    for name in ("port", "debug", "ratio", "mode"):
        console.print("  %s: %s" % (name, "user" if flags.is_set(name) else "default"))

    if positional := flags.positional:
        console.print("Positional arguments:")
        for argument in positional:
            console.print("  - %s" % argument, markup=False)
    else:
        console.print("No positional arguments")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
