"""Step functions shared by the pipeline tests."""

import asyncio
from dataclasses import dataclass

from safepipe.models.outcome import Outcome, Skipped, Succeeded


def add_string_value(context: str) -> str:
    return f"{context}_Updated"


async def wait_for_it(context: str) -> str:
    await asyncio.sleep(0.01)
    return f"{context}_Waited"


def yes_no(context: str) -> Outcome[str]:
    if context.lower() == "yes":
        return Succeeded(context)
    return Skipped()


async def yes_no_async(context: str) -> Outcome[str]:
    await asyncio.sleep(0)
    return yes_no(context)


def throw_not_implemented(context):
    raise NotImplementedError()


async def wait_and_throw(context):
    await asyncio.sleep(0.01)
    raise NotImplementedError()


@dataclass
class Monitor:
    """Records which observers fired."""

    success: bool = False
    failure: bool = False
    skip: bool = False
