# coding: utf-8

#---------------------------------------------------------------------------------------
# (C)2023 Robert Woodhead. Creative Commons Attribution License
#---------------------------------------------------------------------------------------

# Errors raised while translating HACK programs. Every one of them is fatal for the
# program being translated; the offending text (or bit pattern) is kept in .text so
# callers can report it.

from typing import List, Tuple

class HackError(Exception):

    def __init__(self, text: str, message: str):
        super().__init__(message)
        self.text = text

class CompError(HackError):

    def __init__(self, text: str):
        super().__init__(text, f'Unknown alu operation [{text}]')

class JumpError(HackError):

    def __init__(self, text: str):
        super().__init__(text, f'Unknown jump [{text}]')

class WordError(HackError):

    def __init__(self, text: str):
        super().__init__(text, f'Not a 16-bit binary word [{text}]')

# Raised by assemble() once a whole program has been through pass 2; errors is a
# list of (line number, original line, message) tuples, one per bad line.

class AssemblyError(Exception):

    def __init__(self, errors: List[Tuple[int, str, str]]):
        self.errors = errors
        super().__init__('\n'.join([f'Error in line {n}: {msg}' for n, _, msg in errors]))
