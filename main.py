from rich.pretty import pprint

from argbind import *


class Options:
    verbose = False
    count = 1


options = Options()
window = Buffer(2, 0)
path = Slot()

registry = Registry(description="show how declared arguments bind parsed values")
registry.register(Argument("path", message="file to read", sink=path))
registry.register(Argument("-c", "--count", message="how many times", kind=int, sink=Attribute(options, "count")))
registry.register(Argument("-v", "--verbose", message="chatty output", kind=bool, length=0, sink=Attribute(options, "verbose")))
registry.register(Argument("-w", "--window", message="start and stop", kind=int, length=2, sink=window))


@argument("--scale", message="scaling factor", kind=DOUBLE)
def on_scale(value):
    pprint({"scale": value})


registry.register(on_scale)


if __name__ == '__main__':
    pprint(parse(registry, shell=True, colorful=True))
    pprint({"path": path.value, "count": options.count, "verbose": options.verbose, "window": list(window)})
