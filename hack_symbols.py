# coding: utf-8

#---------------------------------------------------------------------------------------
# (C)2023 Robert Woodhead. Creative Commons Attribution License
#---------------------------------------------------------------------------------------

# Symbol resolution for @-instructions. Labels come from pass 1 and are complete before
# anything gets resolved; variables are handed out in pass 2 in order of first use.
# Resolution never fails: anything we don't recognize becomes a variable.

from typing import Optional

from hack_tables import Values, PREDEFINED, VARIABLE_BASE

DECIMALCHARS = set('0123456789')

# Value of a literal decimal integer (optionally signed), or None if s isn't one.
# Negative values are legal here; the 15-bit mask in pass 2 takes care of them.
# Numbers too long for int() to convert aren't literals either, so they end up as
# variables.

def literal(s: str) -> Optional[int]:

    digits = s[1:] if s[:1] in ('-', '+') else s

    if digits == '' or any(c not in DECIMALCHARS for c in digits):
        return None

    try:
        return int(s)
    except ValueError:
        return None

# If s is a register alias (R followed by an integer) return the register number, else None.
# register_limit, if set, is the highest register number accepted as an alias.

def register(s: str, register_limit: Optional[int] = None) -> Optional[int]:

    if not s.startswith('R'):
        return None

    r = literal(s[1:])

    if r is None or (register_limit is not None and not 0 <= r <= register_limit):
        return None

    return r

# Resolve a symbol to an address. Only the variables dictionary is ever changed.

def resolve(sym: str, labels: Values, variables: Values, register_limit: Optional[int] = None) -> int:

    v = literal(sym)
    if v is not None:
        return v

    r = register(sym, register_limit)
    if r is not None:
        return r

    if sym in PREDEFINED:
        return PREDEFINED[sym]
    elif sym in labels:
        return labels[sym]
    elif sym not in variables:
        variables[sym] = VARIABLE_BASE + len(variables)

    return variables[sym]

# Per-program symbol state. A fresh one is made for every program assembled.

class SymbolTable:

    def __init__(self, labels: Optional[Values] = None, register_limit: Optional[int] = None):
        self.labels: Values = dict(labels) if labels else {}
        self.variables: Values = {}
        self.register_limit = register_limit

    def resolve(self, sym: str) -> int:
        return resolve(sym, self.labels, self.variables, self.register_limit)

    # Label declaration; declaring a label again rebinds it.

    def declare_label(self, sym: str, pc: int):
        self.labels[sym] = pc

    def ram_used(self) -> int:
        return VARIABLE_BASE + len(self.variables)
