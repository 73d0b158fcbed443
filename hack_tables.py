# coding: utf-8

#---------------------------------------------------------------------------------------
# (C)2023 Robert Woodhead. Creative Commons Attribution License
#---------------------------------------------------------------------------------------

# Fixed tables for the HACK instruction set. Nothing in here is ever modified.

from typing import Dict

Values = Dict[str, int]     # Name:Values pairs, for example in symbol tables
Bits = Dict[str, str]       # Mnemonic:bit string pairs (or the reverse)

MAXRAM = 16384              # Limit of ram space
MAXROM = 32768              # Limit of rom space

ADDRESS_MASK = 0x7FFF       # @-instructions only have room for 15 bits
ADDRESS_BITS = 15
WORD_BITS = 16
VARIABLE_BASE = 16          # Locations 0-15 are reserved, so 16 is the first available

# C instruction prefix.

CINSTR = '111'

# Predefined symbols (the R0..Rn register aliases are recognized by hack_symbols,
# not stored here).

PREDEFINED: Values = {

    'SP': 0,
    'LCL': 1,
    'ARG': 2,
    'THIS': 3,
    'THAT': 4,

    'SCREEN': 16384,
    'KBD': 24576,

}

# Opcodes for comps. Keys are lower case because C-instructions are lower-cased
# before matching. The leading bit is the a-bit (M instead of A).

COMPS: Bits = {

    '0':    '0101010',
    '1':    '0111111',
    '-1':   '0111010',
    'd':    '0001100',
    'a':    '0110000',
    '!d':   '0001101',
    '!a':   '0110001',
    '-d':   '0001111',
    '-a':   '0110011',
    'd+1':  '0011111',
    'a+1':  '0110111',
    'd-1':  '0001110',
    'a-1':  '0110010',
    'd+a':  '0000010',
    'd-a':  '0010011',
    'a-d':  '0000111',
    'd&a':  '0000000',
    'd|a':  '0010101',

    'm':    '1110000',
    '!m':   '1110001',
    '-m':   '1110011',
    'm+1':  '1110111',
    'm-1':  '1110010',
    'd+m':  '1000010',
    'd-m':  '1010011',
    'm-d':  '1000111',
    'd&m':  '1000000',
    'd|m':  '1010101',

}

# Reverse of the above, producing the canonical (upper case) spelling.

COMP_MNEMONICS: Bits = {bits: comp.upper() for comp, bits in COMPS.items()}

# Jump conditions, bit order is <,=,> relative to the ALU output. Encoding is done by
# set membership on these, decoding by looking the pattern up in JUMPS.

JUMP_LT = frozenset(['jlt', 'jne', 'jle', 'jmp'])
JUMP_EQ = frozenset(['jeq', 'jge', 'jle', 'jmp'])
JUMP_GT = frozenset(['jgt', 'jge', 'jne', 'jmp'])

JUMPS: Bits = {

    '000':  '',
    '001':  'JGT',
    '010':  'JEQ',
    '011':  'JGE',
    '100':  'JLT',
    '101':  'JNE',
    '110':  'JLE',
    '111':  'JMP',

}

# Destinations are bits A,D,M when encoding, but get written out as A,M,D.

DEST_ORDER = 'adm'
DEST_OUTPUT_ORDER = 'AMD'
