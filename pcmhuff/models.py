"""
models.py

The shared objects used in pcmhuff.

"""


import math
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .validators import validate_code


class SymbolFrequency:
    """
    Represents a sample value together with its frequency.
    """
    def __init__(self, sample: int, frequency: int) -> None:
        self.sample: int = sample
        self.frequency: int = frequency

    def __str__(self) -> str:
        return f"[{self.sample}, {self.frequency}]"

    def __repr__(self) -> str:
        return f"[{self.sample}, {self.frequency}]"


class FrequencyTable:
    """
    Occurrence count of every distinct sample value.

    Entries are kept in ascending sample order, which is the enumeration
    order the tree builder relies on for tie-breaking.
    """
    def __init__(self, frequencies: Optional[Dict[int, int]] = None) -> None:
        self._frequencies: Dict[int, int] = {}
        if frequencies is not None:
            for sample in sorted(frequencies):
                count = frequencies[sample]
                if count < 0:
                    raise ValueError("Frequency must be non-negative")
                self._frequencies[int(sample)] = int(count)

    @staticmethod
    def from_samples(samples: Iterable[int]) -> 'FrequencyTable':
        """
        Count every occurrence of each sample value.

        Args:
            samples (Iterable[int]): The sample sequence.

        Returns:
            FrequencyTable: Table with one entry per distinct sample.
        """
        values = np.asarray(samples if isinstance(samples, np.ndarray) else list(samples), dtype=np.int64)
        if values.size == 0:
            return FrequencyTable()
        unique, counts = np.unique(values, return_counts=True)
        return FrequencyTable({int(s): int(c) for s, c in zip(unique, counts)})

    def get_size(self) -> int:
        return len(self._frequencies)

    def total(self) -> int:
        return sum(self._frequencies.values())

    def get_frequency(self, sample: int) -> int:
        return self._frequencies.get(sample, 0)

    def items(self) -> List[SymbolFrequency]:
        return [SymbolFrequency(s, f) for s, f in self._frequencies.items()]

    def entropy(self) -> float:
        """
        Shannon entropy of the distribution in bits per sample.
        """
        total = self.total()
        if self.get_size() <= 1 or total == 0:
            return 0.0
        result = 0.0
        for count in self._frequencies.values():
            if count == 0:
                continue
            p = count / total
            result -= p * math.log2(p)
        return result

    def __len__(self) -> int:
        return len(self._frequencies)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrequencyTable):
            return False
        return self._frequencies == other._frequencies


class CodeTable:
    """
    Maps each sample value to its bit-string code.
    """
    def __init__(self, codes: Optional[Dict[int, str]] = None) -> None:
        self._codes: Dict[int, str] = {}
        if codes is not None:
            for sample, code in codes.items():
                self.add(sample, code)

    def add(self, sample: int, code: str) -> None:
        """
        Add an entry to the table.

        Raises:
            ValueError: If the sample is already present or the code is not a bit string.
        """
        validate_code(code)
        sample = int(sample)
        if sample in self._codes:
            raise ValueError(f"Sample {sample} already has a code")
        self._codes[sample] = code

    def get_code(self, sample: int) -> str:
        return self._codes[sample]

    def contains(self, sample: int) -> bool:
        return sample in self._codes

    def get_size(self) -> int:
        return len(self._codes)

    def items(self) -> List[Tuple[int, str]]:
        """Entries in ascending sample order."""
        return sorted(self._codes.items())

    def as_dict(self) -> Dict[int, str]:
        return dict(self._codes)

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self._codes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodeTable):
            return False
        return self._codes == other._codes

    def __repr__(self) -> str:
        return f"CodeTable({dict(self.items())})"
