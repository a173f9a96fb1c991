import random
import unittest

import numpy as np

from pcmhuff.errors import InvalidCodeTableError, TruncatedStreamError
from pcmhuff.huffman import (
    HuffmanNode,
    build_huffman_tree,
    generate_codes,
    reconstruct_tree,
    decode_bits,
    build_code_bits,
    encode_samples,
)
from pcmhuff.logger import Logger, CodeAssignmentLog
from pcmhuff.models import CodeTable, FrequencyTable
from pcmhuff.settings import HuffmanCoderSettings


def bits_of(text):
    return [int(c) for c in text]


class TestBuildHuffmanTree(unittest.TestCase):
    def test_concrete_tie_break(self):
        root = build_huffman_tree(FrequencyTable.from_samples([5, 5, 5, -3, -3, 7]))
        self.assertEqual(root.freq, 6)
        self.assertEqual(root.left.sample, 5)
        self.assertFalse(root.right.is_leaf())
        self.assertEqual(root.right.freq, 3)
        self.assertEqual(root.right.left.sample, 7)
        self.assertEqual(root.right.right.sample, -3)

    def test_internal_nodes_have_two_children(self):
        rng = random.Random(3)
        samples = [rng.randint(-50, 50) for _ in range(2000)]
        root = build_huffman_tree(FrequencyTable.from_samples(samples))
        stack = [root]
        leaves = 0
        while stack:
            node = stack.pop()
            if node.is_leaf():
                self.assertIsNone(node.left)
                self.assertIsNone(node.right)
                leaves += 1
            else:
                self.assertIsNotNone(node.left)
                self.assertIsNotNone(node.right)
                self.assertEqual(node.freq, node.left.freq + node.right.freq)
                stack.extend([node.left, node.right])
        self.assertEqual(leaves, len(set(samples)))

    def test_single_symbol_is_lone_leaf(self):
        root = build_huffman_tree(FrequencyTable.from_samples([9, 9, 9]))
        self.assertTrue(root.is_leaf())
        self.assertEqual(root.sample, 9)

    def test_empty_table_rejected(self):
        with self.assertRaises(ValueError):
            build_huffman_tree(FrequencyTable())

    def test_zero_sample_is_a_leaf(self):
        root = build_huffman_tree(FrequencyTable.from_samples([0, 0, 1]))
        self.assertEqual(root.left.sample, 1)
        self.assertEqual(root.right.sample, 0)


class TestGenerateCodes(unittest.TestCase):
    def test_concrete_codes(self):
        root = build_huffman_tree(FrequencyTable.from_samples([5, 5, 5, -3, -3, 7]))
        codes = generate_codes(root)
        self.assertEqual(codes.as_dict(), {5: "0", 7: "10", -3: "11"})

    def test_single_symbol_gets_one_bit(self):
        codes = generate_codes(HuffmanNode(sample=4, freq=10))
        self.assertEqual(codes.as_dict(), {4: "0"})
        codes = generate_codes(HuffmanNode(sample=4, freq=10), HuffmanCoderSettings(single_symbol_code="1"))
        self.assertEqual(codes.as_dict(), {4: "1"})

    def test_prefix_free_and_bijective(self):
        rng = random.Random(11)
        samples = [int(rng.gauss(0, 200)) for _ in range(5000)]
        codes = generate_codes(build_huffman_tree(FrequencyTable.from_samples(samples)))
        self.assertEqual(codes.get_size(), len(set(samples)))
        values = [code for _, code in codes.items()]
        for i, a in enumerate(values):
            for b in values[i + 1:]:
                self.assertFalse(a.startswith(b) or b.startswith(a))

    def test_frequent_samples_get_shorter_codes(self):
        samples = [0] * 100 + [1] * 10 + [2] * 5 + [3]
        codes = generate_codes(build_huffman_tree(FrequencyTable.from_samples(samples)))
        self.assertEqual(len(codes.get_code(0)), 1)
        self.assertGreaterEqual(len(codes.get_code(3)), len(codes.get_code(1)))

    def test_code_assignments_logged(self):
        logger = Logger()
        root = build_huffman_tree(FrequencyTable.from_samples([5, 5, 5, -3, -3, 7]))
        generate_codes(root, logger=logger)
        logs = logger.get_logs(CodeAssignmentLog)
        self.assertEqual([(l.sample, l.frequency, l.code_length) for l in logs],
                         [(-3, 2, 2), (5, 3, 1), (7, 1, 2)])


class TestReconstructTree(unittest.TestCase):
    def test_rebuilds_equivalent_tree(self):
        root = reconstruct_tree(CodeTable({5: "0", 7: "10", -3: "11"}))
        self.assertEqual(root.left.sample, 5)
        self.assertEqual(root.right.left.sample, 7)
        self.assertEqual(root.right.right.sample, -3)
        self.assertIsNone(root.sample)

    def test_single_entry_table(self):
        root = reconstruct_tree([(4, "0")])
        self.assertEqual(root.left.sample, 4)
        self.assertIsNone(root.right)

    def test_prefix_of_later_code(self):
        with self.assertRaises(InvalidCodeTableError):
            reconstruct_tree([(1, "0"), (2, "01")])

    def test_later_code_is_prefix(self):
        with self.assertRaises(InvalidCodeTableError):
            reconstruct_tree([(1, "01"), (2, "0")])

    def test_duplicate_code(self):
        with self.assertRaises(InvalidCodeTableError):
            reconstruct_tree([(1, "10"), (2, "10")])

    def test_empty_table(self):
        with self.assertRaises(InvalidCodeTableError):
            reconstruct_tree(CodeTable())

    def test_malformed_codes(self):
        with self.assertRaises(InvalidCodeTableError):
            reconstruct_tree([(1, "")])
        with self.assertRaises(InvalidCodeTableError):
            reconstruct_tree([(1, "0a")])


class TestDecodeBits(unittest.TestCase):
    def setUp(self):
        self.root = reconstruct_tree(CodeTable({5: "0", 7: "10", -3: "11"}))

    def test_decode(self):
        self.assertEqual(decode_bits(self.root, bits_of("000111110")), [5, 5, 5, -3, -3, 7])

    def test_empty_bits(self):
        self.assertEqual(decode_bits(self.root, []), [])

    def test_bits_end_mid_code(self):
        with self.assertRaises(TruncatedStreamError):
            decode_bits(self.root, bits_of("0001"))

    def test_missing_branch(self):
        root = reconstruct_tree([(4, "0")])
        with self.assertRaises(TruncatedStreamError):
            decode_bits(root, bits_of("01"))


class TestEncodeSamples(unittest.TestCase):
    def test_concatenates_codes_in_order(self):
        codes = CodeTable({5: "0", 7: "10", -3: "11"})
        bits = encode_samples(np.array([5, 5, 5, -3, -3, 7], dtype=np.int16), codes)
        self.assertEqual(bits.tolist(), bits_of("000111110"))
        self.assertEqual(bits.dtype, np.uint8)

    def test_empty(self):
        self.assertEqual(encode_samples([], CodeTable({1: "0"})).size, 0)

    def test_prebuilt_code_bits(self):
        codes = CodeTable({5: "0", 7: "10", -3: "11"})
        code_bits = build_code_bits(codes)
        self.assertEqual(code_bits[-3].tolist(), [1, 1])
        bits = encode_samples([7, 5], codes, code_bits)
        self.assertEqual(bits.tolist(), bits_of("100"))


if __name__ == '__main__':
    unittest.main()
