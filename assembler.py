# coding: utf-8

#---------------------------------------------------------------------------------------
# (C)2023 Robert Woodhead. Creative Commons Attribution License
#---------------------------------------------------------------------------------------

# Usage: python3 assembler.py [-s] [-r] [--register-limit N] {asm input files or directories}
#
# Generates .hack output files of the same name; if -s switch is used,
# the label and variable tables are printed. If -r is used, each output is
# compared against {name}_reference.hack and the first difference is reported.
#
# The assembler is the classic two-pass design:
#
# Clean: comments and *all* whitespace are removed (so A = D + 1 becomes A=D+1),
# and blank lines are dropped.
#
# Pass 1: (LABEL) lines are removed and each label is bound to the index of the
# instruction that follows it.
#
# Pass 2: each instruction is turned into a 16 character string of 0s and 1s.
# Unknown symbols in @-instructions become variables, allocated from address 16
# in order of first use.
#
# Symbol tables live in a SymbolTable object made fresh for each program, so
# assembling several files in one run never leaks symbols from one to the next.

import os
import argparse
from typing import List, Dict, Tuple, Any, Iterable, Optional

from hack_errors import HackError, CompError, AssemblyError
from hack_symbols import SymbolTable
from hack_tables import Values, MAXRAM, MAXROM, ADDRESS_MASK, ADDRESS_BITS, CINSTR, COMPS, \
                        JUMP_LT, JUMP_EQ, JUMP_GT, DEST_ORDER

Operation = Dict[str, Any]  # An assembler operation, one per non-comment line.
Line = Tuple[int, str, str] # Line number, line, original (unmunged) line

DEBUG = False               # Debug output flag

# Kill all the comments and all the whitespace (evil trick, but it makes parsing MUCH
# easier), then kill all the blank lines. We keep the line number and the original line
# around for use in errors.

def clean_lines(source: Iterable[str]) -> List[Line]:

    lines = [(i+1, l, l.rstrip('\r\n')) for i, l in enumerate(source)]
    lines = [(l[0], l[1].split('//')[0], l[2]) for l in lines]
    lines = [(l[0], ''.join(l[1].split()), l[2]) for l in lines]

    return [l for l in lines if l[1] != '']

def clean(source: Iterable[str]) -> List[str]:

    return [l[1] for l in clean_lines(source)]

def is_label(s: str) -> bool:

    return len(s) >= 2 and s[0] == '(' and s[-1] == ')'

# Encode an @-instruction.

def encode_a(s: str, symbols: SymbolTable) -> str:

    av = symbols.resolve(s[1:]) & ADDRESS_MASK

    return '0' + format(av, 'b').zfill(ADDRESS_BITS)

# Split a C-instruction into (dest, comp, jump) at the first = and the first ; after it.

def split_c(s: str) -> Tuple[str, str, str]:

    if '=' in s:
        dest, rest = s.split('=', 1)
    else:
        dest, rest = '', s

    if ';' in rest:
        comp, jump = rest.split(';', 1)
    else:
        comp, jump = rest, ''

    return dest, comp, jump

def bits(flags: Iterable[bool]) -> str:

    return ''.join(['1' if f else '0' for f in flags])

# Encode a C-instruction. Mnemonics are case-insensitive, so matching is done in lower
# case; errors quote the text as written.

def encode_c(s: str) -> str:

    dest, ocomp, jump = split_c(s)
    dest, comp, jump = dest.lower(), ocomp.lower(), jump.lower()

    if comp not in COMPS:
        raise CompError(ocomp)

    # Jumps that aren't in any condition set (typos included) encode as 000.

    return CINSTR + COMPS[comp] + bits([d in dest for d in DEST_ORDER]) + \
           bits([jump in JUMP_LT, jump in JUMP_EQ, jump in JUMP_GT])

# Pass 2 for a single (label-free) line.

def encode(s: str, symbols: SymbolTable) -> str:

    if s[0] == '@':
        return encode_a(s, symbols)
    else:
        return encode_c(s)

# Parse a line into an Operation dictionary. Rather than use a rigid class to hold all the
# information we glean from parsing, a name:value dictionary is used; it's flexible, and
# the codegen step just adds 'code' or 'error' to it.
#
# Operation cTypes are: A=Aop, C=Cop, L=Label.

def operation(line: Line) -> Operation:

    o = line[1]

    if o[0] == '@':
        return {'cType': 'A', 'symbol': o[1:], 'line': line}
    elif is_label(o):
        return {'cType': 'L', 'symbol': o[1:-1], 'line': line}
    else:
        return {'cType': 'C', 'line': line}

# Pass 1: bind each label to the number of instructions seen so far. Label operations
# don't take up an instruction slot; a label declared twice takes the later position.
# Returns the A and C operations, in order.

def pass1(ops: List[Operation], symbols: SymbolTable) -> List[Operation]:

    pc = 0  # Program counter

    for o in ops:
        if o['cType'] == 'L':
            symbols.declare_label(o['symbol'], pc)
        else:
            pc += 1

    return [o for o in ops if o['cType'] != 'L']

# Pass 1 on plain cleaned lines: returns the lines with the labels removed, and the label
# table.

def labelize(code: List[str]) -> Tuple[List[str], Values]:

    symbols = SymbolTable()
    remaining = pass1([operation((i+1, l, l)) for i, l in enumerate(code)], symbols)

    return [o['line'][1] for o in remaining], symbols.labels

# Generate the code for an Operation, add it to the operation, and return the modified
# object. Errors are recorded in the operation rather than raised, so that one bad line
# doesn't hide the rest.

def codegen(o: Operation, symbols: SymbolTable) -> Operation:

    try:
        o['code'] = encode(o['line'][1], symbols)
    except HackError as oops:
        o['error'] = str(oops)

    return o

# Run both passes over some source text. Returns all the operations (every A and C
# operation ends up with either a 'code' or an 'error') and the symbol table that was
# built.

def translate(source: Iterable[str], symbols: Optional[SymbolTable] = None) -> Tuple[List[Operation], SymbolTable]:

    if symbols is None:
        symbols = SymbolTable()

    ops = [operation(l) for l in clean_lines(source)]

    if DEBUG:
        for o in ops:
            print(o)
        print()
        print('Pass 1')

    instructions = pass1(ops, symbols)

    if DEBUG:
        print(symbols.labels)
        print()
        print('Pass 2')

    for o in instructions:
        codegen(o, symbols)

    if DEBUG:
        for o in ops:
            print(o)
        print()

    return ops, symbols

def errors_of(ops: List[Operation]) -> List[Tuple[int, str, str]]:

    return [(o['line'][0], o['line'][2], o['error']) for o in ops if 'error' in o]

# The pure entry point: source lines in, binary lines out.

def assemble(source: Iterable[str], register_limit: Optional[int] = None) -> List[str]:

    ops, _ = translate(source, SymbolTable(register_limit=register_limit))
    errors = errors_of(ops)

    if errors:
        raise AssemblyError(errors)

    return [o['code'] for o in ops if 'code' in o]

# Print a symbol table, one symbol per line, in address order.

def print_symbols(symbols: Values, title: str):

    if not symbols:
        return

    max_width = max([len(s) for s in symbols])

    print(title)
    print('-'*max_width + ' -----')

    for s in sorted(symbols, key=lambda s: (symbols[s], s)):
        print(f'{s:{max_width}} {symbols[s]:5}')

    print()

# Compare generated code against a reference .hack file. Returns an error message, or
# None if they match. cleaned is the cleaned source, used to show some context.

def compare_reference(prog: List[str], reference: List[str], cleaned: List[str]) -> Optional[str]:

    reference = [r.strip() for r in reference if r.strip() != '']

    if len(reference) != len(prog):
        return f'Length of reference ({len(reference)}) and generated code ({len(prog)}) not the same'

    for i, (r, p) in enumerate(zip(reference, prog)):
        if r != p:
            context = '\n'.join(['\t' + c for c in cleaned[max(0, i-3):i+4]])
            line = cleaned[i] if i < len(cleaned) else ''
            return f'Reference and generated code different at instruction {i}\nLine in ASM: {line}\n{context}'

    return None

# The actual assembler, for one file. Returns True if it worked.

def avengers_assemble(fname: str, print_symbol_table: bool = False, check_reference: bool = False,
                      register_limit: Optional[int] = None) -> bool:

    oname = fname[:-4] + '.hack'

    with open(fname, encoding='utf-8') as asmfile:
        ops, symbols = translate(asmfile, SymbolTable(register_limit=register_limit))

    errors = errors_of(ops)

    if errors:
        for n, original, msg in errors:
            print('Error in line ' + str(n) + ': ' + msg)
            print('\t' + original)
        print(f'Assembly of {fname} aborted -- {len(errors)} error(s) detected.')
        return False

    if print_symbol_table:
        print()
        print_symbols(symbols.labels, 'Branch Addresses')
        print_symbols(symbols.variables, 'Variables')

    prog = [o['code'] for o in ops if 'code' in o]

    with open(oname, 'w', encoding='utf-8') as hackfile:
        for p in prog:
            hackfile.write(p + '\n')

    pc = len(prog)
    ram = symbols.ram_used()

    print(f'Program length: {pc} (of {MAXROM}, {int(pc*100/MAXROM)}%), RAM usage: {ram} (of {MAXRAM}, {int(ram*100/MAXRAM)}%)')
    print('Assembly successful - results written to ' + oname)

    if check_reference:
        rname = fname[:-4] + '_reference.hack'
        if not os.path.isfile(rname):
            print(f'Error: Reference file [{rname}] does not exist')
            return False
        with open(rname, encoding='utf-8') as reffile:
            mismatch = compare_reference(prog, reffile.readlines(), [o['line'][1] for o in ops if 'code' in o])
        if mismatch:
            print(f'Error: {mismatch}')
            return False
        print('Output matches ' + rname)

    return True

# Expand directories into the .asm files they contain, leaving out disassembler output.

def asm_files(names: List[str]) -> List[str]:

    files = []

    for name in names:
        if os.path.isdir(name):
            for root, _, fnames in sorted(os.walk(name)):
                files += [os.path.join(root, f) for f in sorted(fnames)
                          if f.endswith('.asm') and not f.endswith('.dis.asm')]
        else:
            files.append(name)

    return files

def main(argv: Optional[List[str]] = None) -> int:

    parser = argparse.ArgumentParser(
                    prog = 'assembler.py',
                    description = 'Assembles HACK programs',
                    epilog = 'Results are stored in a .hack file with the same name as the .asm file')

    parser.add_argument('filenames', nargs='+', help='HACK .asm files (or directories of them) to be assembled')
    parser.add_argument('-s', '--symbols', action='store_true', required=False, help='prints helpful symbol tables')
    parser.add_argument('-r', '--reference', action='store_true', required=False, help='compares output with {name}_reference.hack')
    parser.add_argument('--register-limit', type=int, default=None, metavar='N', help='only treat R0..RN as register aliases (default: any R<number>)')

    args = parser.parse_args(argv)

    ok = True

    for fname in asm_files(args.filenames):

        if not fname.endswith('.asm'):
            print(f'Error: Input filename [{fname}] must end in .asm')
            ok = False
        elif not os.path.isfile(fname):
            print(f'Error: Input file [{fname}] does not exist')
            ok = False
        else:
            ok = avengers_assemble(fname, args.symbols, args.reference, args.register_limit) and ok

    return 0 if ok else 1

# Main level.

if __name__ == '__main__':

    exit(main())
