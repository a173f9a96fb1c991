# huffman.py

import heapq
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from .errors import InvalidCodeTableError, TruncatedStreamError
from .logger import Logger, CodeAssignmentLog
from .models import CodeTable, FrequencyTable
from .settings import HuffmanCoderSettings


class HuffmanNode:
    def __init__(self, sample=None, freq=0):
        self.left: Optional['HuffmanNode'] = None
        self.right: Optional['HuffmanNode'] = None
        self.sample: Optional[int] = sample  # None for internal nodes
        self.freq = freq

    def is_leaf(self) -> bool:
        return self.sample is not None

    def has_children(self) -> bool:
        return self.left is not None or self.right is not None


def build_huffman_tree(frequency_table: FrequencyTable) -> HuffmanNode:
    """
    Build a Huffman tree by repeatedly combining the two lightest nodes.

    Heap entries are ordered by (weight, order). Leaves take order 0..n-1 in
    ascending sample order and every combined node takes the next unused
    order number, so equal weights resolve to the older node first. The
    first node popped becomes the left child.

    Args:
        frequency_table (FrequencyTable): Non-empty frequency table.

    Returns:
        HuffmanNode: Root of the tree; a lone leaf for single-symbol input.
    """
    if frequency_table.get_size() == 0:
        raise ValueError("Cannot build a Huffman tree from an empty frequency table")

    heap: List[Tuple[int, int, HuffmanNode]] = []
    for order, entry in enumerate(frequency_table.items()):
        heap.append((entry.frequency, order, HuffmanNode(sample=entry.sample, freq=entry.frequency)))
    heapq.heapify(heap)
    next_order = len(heap)

    while len(heap) > 1:
        freq1, _, node1 = heapq.heappop(heap)
        freq2, _, node2 = heapq.heappop(heap)
        merged = HuffmanNode(freq=freq1 + freq2)
        merged.left = node1
        merged.right = node2
        heapq.heappush(heap, (merged.freq, next_order, merged))
        next_order += 1

    return heap[0][2]


def generate_codes(root: HuffmanNode,
                   settings: Optional[HuffmanCoderSettings] = None,
                   logger: Optional[Logger] = None) -> CodeTable:
    """
    Walk the tree and record the left/right path to every leaf.

    A root that is itself a leaf has no path bits, so it receives the
    configured single symbol code.
    """
    if settings is None:
        settings = HuffmanCoderSettings()
    codes = CodeTable()

    if root.is_leaf():
        codes.add(root.sample, settings.single_symbol_code)
    else:
        # Iterative walk; deep trees would exceed the recursion limit.
        stack = [(root, '')]
        while stack:
            node, code = stack.pop()
            if node.is_leaf():
                codes.add(node.sample, code)
                continue
            stack.append((node.right, code + '1'))
            stack.append((node.left, code + '0'))

    if logger is not None:
        for sample, code in codes.items():
            logger.log(CodeAssignmentLog(sample, _leaf_frequency(root, code), len(code)))
    return codes


def _leaf_frequency(root: HuffmanNode, code: str) -> int:
    node = root
    for bit in code:
        if node.is_leaf():
            break
        node = node.left if bit == '0' else node.right
    return node.freq


def reconstruct_tree(code_table: Union[CodeTable, Iterable[Tuple[int, str]]]) -> HuffmanNode:
    """
    Rebuild a decoding tree from stored (sample, code) pairs.

    Missing branches are created on demand. Internal nodes may end up with a
    single child when the table does not use both branches.

    Raises:
        InvalidCodeTableError: If the table is empty, a code is malformed,
            or the codes are not prefix-free.
    """
    entries = code_table.items() if isinstance(code_table, CodeTable) else list(code_table)
    if len(entries) == 0:
        raise InvalidCodeTableError("Code table is empty")

    root = HuffmanNode()
    for sample, code in entries:
        if not isinstance(code, str) or len(code) == 0:
            raise InvalidCodeTableError(f"Sample {sample} has an empty code")
        if code.strip('01') != '':
            raise InvalidCodeTableError(f"Sample {sample} has a code with characters other than 0 and 1")

        node = root
        for bit in code:
            if node.is_leaf():
                raise InvalidCodeTableError(
                    f"Code {code} of sample {sample} extends the code of sample {node.sample}")
            if bit == '0':
                if node.left is None:
                    node.left = HuffmanNode()
                node = node.left
            else:
                if node.right is None:
                    node.right = HuffmanNode()
                node = node.right

        if node.is_leaf():
            raise InvalidCodeTableError(f"Code {code} is assigned to both {node.sample} and {sample}")
        if node.has_children():
            raise InvalidCodeTableError(f"Code {code} of sample {sample} is a prefix of another code")
        node.sample = int(sample)
    return root


def decode_bits(root: HuffmanNode, bits: Iterable[int]) -> List[int]:
    """
    Traverse the tree bit by bit, emitting a sample at every leaf.

    Raises:
        TruncatedStreamError: If a bit leads to a branch the tree does not
            have, or the bits end before a leaf is reached.
    """
    decoded: List[int] = []
    node = root
    consumed = 0
    for bit in bits:
        node = node.left if bit == 0 else node.right
        consumed += 1
        if node is None:
            raise TruncatedStreamError(f"code containing bit {consumed - 1}", consumed, consumed - 1)
        if node.is_leaf():
            decoded.append(node.sample)
            node = root
    if node is not root:
        raise TruncatedStreamError("encoded bits", consumed + 1, consumed)
    return decoded


def build_code_bits(code_table: CodeTable) -> Dict[int, np.ndarray]:
    """Map every sample to its code as a 0/1 array."""
    return {sample: np.frombuffer(code.encode('ascii'), dtype=np.uint8) - ord('0')
            for sample, code in code_table.items()}


def encode_samples(samples: np.ndarray, code_table: CodeTable,
                   code_bits: Optional[Dict[int, np.ndarray]] = None) -> np.ndarray:
    """
    Concatenate the code of every sample, in order, into a 0/1 array.

    Callers encoding in blocks pass code_bits from build_code_bits so the
    mapping is built once.
    """
    if len(samples) == 0:
        return np.zeros(0, dtype=np.uint8)
    if code_bits is None:
        code_bits = build_code_bits(code_table)
    return np.concatenate([code_bits[int(s)] for s in samples]).astype(np.uint8)
