"""
test_disassembler.py  -  Unit tests for disassembler.py
========================================================
Run:  pytest tests
"""

import unittest

from assembler import encode_c, split_c
from disassembler import decode, disassemble, strip_count
from hack_errors import CompError, WordError
from hack_tables import COMPS, JUMPS


# ─────────────────────────────────────────────────────────────────────────────
class TestDecode(unittest.TestCase):

    def test_address(self):     self.assertEqual(decode('0000000000010000'), '@16')
    def test_max_address(self): self.assertEqual(decode('0111111111111111'), '@32767')
    def test_comp_only(self):   self.assertEqual(decode('1110101010000000'), '0')
    def test_jump(self):        self.assertEqual(decode('1110101010000111'), '0;JMP')
    def test_dest(self):        self.assertEqual(decode('1110011111010000'), 'D=D+1')
    def test_d_or_a(self):      self.assertEqual(decode('1110010101010000'), 'D=D|A')
    def test_whitespace(self):  self.assertEqual(decode('  1110001100000001\n'), 'D;JGT')

    def test_dest_canonical_order(self):
        self.assertEqual(decode(encode_c('DM=M+1')), 'MD=M+1')
        self.assertEqual(decode(encode_c('DMA=-1;JLT')), 'AMD=-1;JLT')
        self.assertEqual(decode(encode_c('DA=D-A')), 'AD=D-A')

    def test_unknown_comp(self):
        with self.assertRaises(CompError) as ctx:
            decode('1111111111000000')
        self.assertEqual(ctx.exception.text, '1111111')
        self.assertIn('1111111', str(ctx.exception))

    def test_bad_word(self):
        for bad in ['0101', '11100000000000000', '111000000000000x', '']:
            with self.assertRaises(WordError):
                decode(bad)


# ─────────────────────────────────────────────────────────────────────────────
class TestRoundTrip(unittest.TestCase):

    def test_every_comp_and_jump(self):
        for comp in COMPS:
            for jump in JUMPS.values():
                for dest in ['', 'M', 'DM', 'AMD']:
                    instr = (dest + '=' if dest else '') + comp.upper() + (';' + jump if jump else '')
                    d, c, j = split_c(decode(encode_c(instr)))
                    self.assertEqual(set(d), set(dest), instr)
                    self.assertEqual(c.lower(), comp, instr)
                    self.assertEqual(j, jump, instr)


# ─────────────────────────────────────────────────────────────────────────────
class TestDisassemble(unittest.TestCase):

    def test_program(self):
        self.assertEqual(disassemble(['0000000000000010', '', '1110110000010000', '1111110010101000']),
                         ['@2', 'D=A', 'AM=M-1'])

    def test_count_line(self):
        self.assertEqual(strip_count(['2\n', '0000000000000010\n', '1110110000010000\n']),
                         ['0000000000000010\n', '1110110000010000\n'])
        self.assertEqual(strip_count(['0000000000000010']), ['0000000000000010'])


if __name__ == '__main__':
    unittest.main()
