from datetime import datetime
from enum import Enum

from rich.pretty import pprint

from verbum import *

__prog__ = "demo"


class Level(Enum):
    LOW = 1
    HIGH = 2


@verb("do", descr="do something with a target", usage="do <target> [-l value] [-r n] [-q]")
class DoVerb(Verb):
    target: str = Option(order=0, descr="what to act on")
    long_option: str = Option("-l", "--longOptionName", descr="free-form value")
    retries: int = Option("-r", default=1, descr="how many attempts")
    quiet: bool = Option("-q", descr="say nothing")
    items: list[str] = Option("--items", descr="extra values")
    level: Level = Option("--level", default=Level.LOW, descr="low or high")
    when: datetime = Option("--when", descr="ISO date/time")

    async def run(self):
        pprint(vars(self))


if __name__ == '__main__':
    App(DoVerb, shell=True, fancy=True, colorful=True).run()
