import copy
import itertools
import random
import unittest

from infbitset import (
    INFINITY,
    BitSet,
    BitSetSyntaxError,
    IndefiniteSetError,
    IndexList,
    ReadOnlyBitSet,
    load_bitset,
)


class TestConstruction(unittest.TestCase):
    def test_empty(self):
        self.assertTrue(BitSet().is_empty())
        self.assertTrue(BitSet(None).is_empty())
        self.assertEqual(BitSet().to_string(), "0")

    def test_from_int(self):
        self.assertEqual(BitSet(5).to_array(), [0, 2])
        self.assertEqual(BitSet(-1).words, [-1])
        self.assertEqual(BitSet(-1).extension, 0)
        self.assertEqual(BitSet(-1).cardinality(), 32)

    def test_from_strings(self):
        self.assertEqual(BitSet("0b1010").to_array(), [1, 3])
        self.assertEqual(BitSet("1010").to_array(), [1, 3])
        self.assertEqual(BitSet("0xff").cardinality(), 8)
        self.assertEqual(BitSet.from_binary_string("101").to_array(), [0, 2])
        self.assertEqual(BitSet.from_hex_string("10").to_array(), [4])

    def test_long_strings_span_words(self):
        bs = BitSet("0b1" + "0" * 39)
        self.assertEqual(bs.to_array(), [39])
        self.assertEqual(BitSet("0x123456789").to_string(16), "123456789")

    def test_invalid_strings(self):
        for text in ["", "0b", "0x", "0b102", "0xfg", "abc", "1_0", "+101"]:
            with self.assertRaises(BitSetSyntaxError):
                BitSet(text)

    def test_from_indices(self):
        self.assertEqual(BitSet([4, 0, 2, 2]).to_array(), [0, 2, 4])
        self.assertEqual(BitSet((70,)).to_array(), [70])
        self.assertEqual(BitSet({3, 1}).to_array(), [1, 3])
        self.assertEqual(BitSet(range(3)).to_string(), "111")

    def test_from_bytes(self):
        bs = BitSet(bytes([0b00000101, 0x80]))
        self.assertEqual(bs.to_array(), [0, 2, 15])
        self.assertEqual(BitSet(bytearray(5)).words, [0, 0])
        self.assertTrue(BitSet(b"").is_empty())

    def test_from_variant(self):
        self.assertEqual(BitSet(IndexList((0, 2))).to_string(), "101")

    def test_unsupported_type(self):
        with self.assertRaises(BitSetSyntaxError):
            BitSet(1.5)
        with self.assertRaises(ValueError):
            BitSet(object())

    def test_copy_does_not_alias(self):
        a = BitSet(5)
        b = BitSet(a)
        b.set(10)
        self.assertEqual(a.get(10), 0)
        c = copy.copy(a)
        c.clear(0)
        self.assertEqual(a.get(0), 1)
        d = copy.deepcopy(a)
        self.assertEqual(d, a)

    def test_load_bitset(self):
        self.assertEqual(load_bitset([1]).to_string(), "10")


class TestMutation(unittest.TestCase):
    def test_set_and_get(self):
        bs = BitSet()
        self.assertIs(bs.set(3), bs)
        self.assertEqual(bs.get(3), 1)
        bs.set(3, 0)
        self.assertEqual(bs.get(3), 0)
        bs.set(4, None)
        self.assertEqual(bs.get(4), 1)

    def test_set_far_index_grows_storage(self):
        bs = BitSet()
        bs.set(1000)
        self.assertEqual(bs.get(1000), 1)
        self.assertEqual(len(bs.words), 32)
        self.assertEqual(bs.msb(), 1000)

    def test_clear_far_index(self):
        bs = BitSet()
        bs.clear(5000)
        self.assertEqual(bs.get(5000), 0)
        self.assertTrue(bs.is_empty())

    def test_growth_of_indefinite_set_fills_ones(self):
        bs = BitSet([INFINITY])
        bs.clear(100)
        self.assertEqual(bs.get(99), 1)
        self.assertEqual(bs.get(100), 0)
        self.assertEqual(bs.get(101), 1)

    def test_negative_index(self):
        with self.assertRaises(IndexError):
            BitSet().set(-1)
        with self.assertRaises(IndexError):
            BitSet().get(-1)
        with self.assertRaises(IndexError):
            BitSet().flip(-1)

    def test_flip(self):
        self.assertTrue(BitSet(5).flip().indefinite)
        self.assertEqual(BitSet(5).flip(0).to_string(), "100")
        self.assertEqual(BitSet(1).flip(1, 3).to_string(), "1111")
        self.assertEqual(BitSet(1).flip(3, 1).to_string(), "1")
        self.assertEqual(BitSet(1).flip(-1, 3).to_string(), "1")
        self.assertEqual(BitSet().flip(30, 40).to_array(), list(range(30, 41)))

    def test_clear(self):
        bs = ~BitSet(5)
        bs.clear()
        self.assertTrue(bs.is_empty())
        self.assertEqual(BitSet("0b1111").clear(1, 2).to_string(), "1001")
        self.assertEqual(BitSet("0b1111").clear(2, 1).to_string(), "1111")

    def test_clear_range_on_indefinite(self):
        bs = ~BitSet()
        bs.clear(0, 63)
        self.assertEqual(bs.to_array(), [INFINITY])
        self.assertEqual(bs.get(63), 0)
        self.assertEqual(bs.get(64), 1)

    def test_set_range(self):
        self.assertEqual(BitSet().set_range(2, 4, 1).to_string(), "11100")
        self.assertEqual(BitSet().set_range(4, 2, 1).to_string(), "0")
        self.assertEqual(BitSet("0b11111").set_range(1, 3, 0).to_string(), "10001")
        self.assertEqual(BitSet().set_range(0, 99).cardinality(), 100)

    def test_set_range_none_sets_bits(self):
        self.assertEqual(BitSet().set_range(1, 3, None).to_string(), "1110")
        self.assertEqual(BitSet().set(2, None).to_string(), BitSet().set_range(2, 2, None).to_string())

    def test_item_protocol(self):
        bs = BitSet()
        bs[7] = 1
        self.assertEqual(bs[7], 1)
        self.assertIn(7, bs)
        self.assertNotIn(6, bs)
        self.assertNotIn(-1, bs)


class TestQueries(unittest.TestCase):
    def test_cardinality(self):
        self.assertEqual(BitSet([1, 40, 90]).cardinality(), 3)
        self.assertEqual(BitSet([INFINITY]).cardinality(), INFINITY)
        self.assertEqual(BitSet().cardinality(), 0)

    def test_msb(self):
        self.assertEqual(BitSet(5).msb(), 2)
        self.assertEqual(BitSet([31]).msb(), 31)
        self.assertEqual(BitSet([64]).msb(), 64)
        self.assertEqual(BitSet().msb(), INFINITY)
        self.assertEqual((~BitSet()).msb(), INFINITY)

    def test_lsb_and_ntz(self):
        self.assertEqual(BitSet([3, 9]).lsb(), 3)
        self.assertEqual(BitSet([40]).ntz(), 40)
        self.assertEqual(BitSet().lsb(), 0)
        self.assertEqual(BitSet().ntz(), INFINITY)
        indefinite = BitSet([INFINITY])
        self.assertEqual(indefinite.lsb(), 1)
        self.assertEqual(indefinite.ntz(), INFINITY)

    def test_is_empty(self):
        self.assertTrue(BitSet().is_empty())
        self.assertFalse(BitSet(1).is_empty())
        self.assertFalse(BitSet([INFINITY]).is_empty())
        self.assertFalse(bool(BitSet()))
        self.assertTrue(bool(BitSet(2)))

    def test_to_array(self):
        self.assertEqual(BitSet([33, 2, 1]).to_array(), [1, 2, 33])
        self.assertEqual(BitSet([1, INFINITY]).to_array(), [1, INFINITY])

    def test_indefinite_reads_past_storage(self):
        bs = BitSet([INFINITY])
        self.assertEqual(bs.get(1000), 1)
        self.assertEqual(bs.get(0), 0)
        self.assertEqual(bs.extension, -1)

    def test_read_only_surface(self):
        self.assertIsInstance(BitSet(), ReadOnlyBitSet)

    def test_unhashable(self):
        with self.assertRaises(TypeError):
            hash(BitSet())


class TestToString(unittest.TestCase):
    def test_binary(self):
        self.assertEqual(BitSet([0, 2, 4]).to_string(2), "10101")
        self.assertEqual(str(BitSet(6)), "110")
        self.assertEqual(repr(BitSet(6)), "<BitSet 110>")

    def test_power_of_two_bases(self):
        self.assertEqual(BitSet(255).to_string(16), "ff")
        self.assertEqual(BitSet(8).to_string(8), "10")
        self.assertEqual(BitSet("0x100000000").to_string(8), "40000000000")
        self.assertEqual(BitSet(163).to_string(32), "53")
        self.assertEqual(BitSet(27).to_string(4), "123")

    def test_other_bases(self):
        self.assertEqual(BitSet(5).to_string(3), "12")
        self.assertEqual(BitSet(255).to_string(10), "255")
        self.assertEqual(BitSet(-1).to_string(10), "4294967295")
        self.assertEqual(BitSet("0x100000000").to_string(10), "4294967296")
        self.assertEqual(BitSet(35).to_string(36), "z")
        self.assertEqual(BitSet().to_string(10), "0")

    def test_default_base(self):
        self.assertEqual(BitSet(5).to_string(None), "101")
        self.assertEqual(BitSet(5).to_string(0), "101")

    def test_invalid_base(self):
        for base in (1, 37, -2, 2.0):
            with self.assertRaises(BitSetSyntaxError):
                BitSet(5).to_string(base)

    def test_indefinite(self):
        self.assertEqual((~BitSet()).to_string(), "...1111")
        self.assertEqual((~BitSet(5)).to_string(), "...1111010")
        self.assertEqual(repr(~BitSet(5)), "<BitSet ...1111010>")
        with self.assertRaises(IndefiniteSetError):
            (~BitSet(5)).to_string(10)

    def test_indefinite_marker_in_other_power_of_two_bases(self):
        self.assertEqual((~BitSet(5)).to_string(16), "...1111fffffffa")
        self.assertEqual((~BitSet()).to_string(4), "...1111" + "3" * 16)
        self.assertEqual(BitSet([INFINITY]).to_string(16), "...111100000000")
        for base in (2, 4, 8, 16, 32):
            self.assertTrue((~BitSet(5)).to_string(base).startswith("...1111"))


class TestIteration(unittest.TestCase):
    def test_finite(self):
        self.assertEqual(list(BitSet("0b1011")), [1, 1, 0, 1])
        self.assertEqual(list(BitSet()), [])
        self.assertEqual(len(list(BitSet([40]))), 41)

    def test_indefinite_is_endless(self):
        bits = list(itertools.islice(iter(~BitSet(1)), 40))
        self.assertEqual(bits, [0] + [1] * 39)

    def test_fresh_iteration(self):
        bs = BitSet(3)
        it = iter(bs)
        self.assertEqual(list(it), [1, 1])
        self.assertEqual(list(it), [])
        self.assertEqual(list(bs), [1, 1])


class TestRandom(unittest.TestCase):
    def test_bounded(self):
        rng = random.Random(7)
        for n in (1, 10, 32, 33, 100):
            bs = BitSet.random(n, rng)
            self.assertFalse(bs.indefinite)
            if not bs.is_empty():
                self.assertLess(bs.msb(), n)

    def test_defaults(self):
        self.assertEqual(len(BitSet.random().words), 1)
        self.assertEqual(len(BitSet.random(-5).words), 1)
        self.assertTrue(BitSet.random(0).is_empty())

    def test_seeded(self):
        self.assertEqual(BitSet.random(64, random.Random(3)), BitSet.random(64, random.Random(3)))


if __name__ == "__main__":
    unittest.main()
