#!/usr/bin/env python3
"""Interactive console prompts."""

import getpass

import colorama


class Prompter:
    """Reads answers from the terminal; EOF counts as an empty answer."""

    @staticmethod
    def ask(question: str) -> str:
        try:
            return input(f"{colorama.Fore.CYAN}{question}{colorama.Style.RESET_ALL} ")
        except EOFError:
            return ""

    @staticmethod
    def ask_secret(question: str) -> str:
        print(f"{colorama.Fore.CYAN}{question}{colorama.Style.RESET_ALL}")
        try:
            return getpass.getpass("")
        except EOFError:
            return ""

    @classmethod
    def confirm(cls, question: str) -> bool:
        answer = cls.ask(f"{colorama.Fore.YELLOW}{question} (y/n)")
        return answer.strip().lower() in ("y", "yes")
