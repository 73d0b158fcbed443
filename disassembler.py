# coding: utf-8

#---------------------------------------------------------------------------------------
# (C)2023 Robert Woodhead. Creative Commons Attribution License
#---------------------------------------------------------------------------------------

# Usage: python3 disassembler.py [-o output] {hack input files}
#
# Turns .hack files back into assembly, written to {name}.dis.asm. With no input
# files, reads binary lines from standard input and writes the assembly to standard
# output.
#
# Symbols can't be recovered from the binary, so @-instructions always come back as
# plain numbers, and destinations are always written in A, M, D order.

import os
import sys
import argparse
from typing import List, Iterable, Optional

from hack_errors import HackError, CompError, JumpError, WordError
from hack_tables import COMP_MNEMONICS, JUMPS, DEST_OUTPUT_ORDER, WORD_BITS

BINARYCHARS = set('01')

def is_word(s: str) -> bool:

    return len(s) == WORD_BITS and all(c in BINARYCHARS for c in s)

def decode_a(word: str) -> str:

    return '@' + str(int(word[1:], 2))

def decode_c(word: str) -> str:

    comp_bits, dest_bits, jump_bits = word[3:10], word[10:13], word[13:16]

    if comp_bits not in COMP_MNEMONICS:
        raise CompError(comp_bits)

    if jump_bits not in JUMPS:
        raise JumpError(jump_bits)

    # dest bits are A,D,M; output order is A,M,D.

    present = {'A': dest_bits[0] == '1', 'D': dest_bits[1] == '1', 'M': dest_bits[2] == '1'}
    dest = ''.join([d for d in DEST_OUTPUT_ORDER if present[d]])
    jump = JUMPS[jump_bits]

    return (dest + '=' if dest else '') + COMP_MNEMONICS[comp_bits] + (';' + jump if jump else '')

# Decode a single 16-bit word.

def decode(word: str) -> str:

    word = word.strip()

    if not is_word(word):
        raise WordError(word)

    match word[0]:

        case '0':   # @-Instruction
            return decode_a(word)

        case '1':   # C-Instruction
            return decode_c(word)

# The pure entry point: binary lines in, assembly lines out. Blank lines are skipped.

def disassemble(lines: Iterable[str]) -> List[str]:

    return [decode(l) for l in lines if l.strip() != '']

# Old-style input started with a count of the lines that followed; ignore it if present.

def strip_count(lines: List[str]) -> List[str]:

    if lines and not is_word(lines[0].strip()) and lines[0].strip().isdigit():
        return lines[1:]

    return lines

def disassemble_file(fname: str, oname: Optional[str] = None) -> bool:

    oname = oname or os.path.splitext(fname)[0] + '.dis.asm'

    with open(fname, encoding='utf-8') as hackfile:
        lines = strip_count(hackfile.readlines())

    try:
        prog = disassemble(lines)
    except HackError as oops:
        print(f'Error in {fname}: {oops}')
        return False

    with open(oname, 'w', encoding='utf-8') as asmfile:
        for p in prog:
            asmfile.write(p + '\n')

    print(f'Disassembly successful - {len(prog)} instructions written to ' + oname)

    return True

def main(argv: Optional[List[str]] = None) -> int:

    parser = argparse.ArgumentParser(
                    prog = 'disassembler.py',
                    description = 'Disassembles HACK binaries',
                    epilog = 'Results are stored in a .dis.asm file with the same name as the .hack file')

    parser.add_argument('filenames', nargs='*', help='HACK .hack files to be disassembled (default: standard input)')
    parser.add_argument('-o', '--output', default=None, help='output file (only with a single input file)')

    args = parser.parse_args(argv)

    if not args.filenames:
        try:
            for p in disassemble(strip_count(sys.stdin.readlines())):
                print(p)
        except HackError as oops:
            print(f'Error: {oops}')
            return 1
        return 0

    if args.output and len(args.filenames) > 1:
        print('Error: -o can only be used with a single input file')
        return 1

    ok = True

    for fname in args.filenames:
        if not os.path.isfile(fname):
            print(f'Error: Input file [{fname}] does not exist')
            ok = False
        else:
            ok = disassemble_file(fname, args.output) and ok

    return 0 if ok else 1

# Main level.

if __name__ == '__main__':

    exit(main())
