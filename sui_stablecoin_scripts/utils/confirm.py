from typing import Callable

Confirm = Callable[[], bool]


def prompt_confirmation() -> bool:
    while True:
        response = input("Are you sure? (Y/N): ")
        if response in ("Y", "N"):
            return response == "Y"


def always_confirm() -> bool:
    return True


def confirmation(yes: bool) -> Confirm:
    return always_confirm if yes else prompt_confirmation
