"""
sorting.py — Sorting bar steps
================================
Ten bars whose heights are drawn ONCE per sequence, so every frame of a
run shows the same data.  Each step grows a sorted prefix (coloured)
until the final frame is fully sorted.  The pair being compared is
highlighted.
"""

import random
from typing import Dict, List, Optional

from algorithms.step import Step, StepBuilder, line_of


SUPPORTED = {"quicksort", "mergesort", "heapsort"}

STEP_COUNT = 8
ARRAY_SIZE = 10

SORTED_COLOR = "#10b981"


QUICKSORT_CODE = """int partition(std::vector<int>& arr, int low, int high) {
  int pivot = arr[high];
  int i = (low - 1);
  for (int j = low; j <= high - 1; j++) {
    if (arr[j] < pivot) {
      i++;
      std::swap(arr[i], arr[j]);
    }
  }
  std::swap(arr[i + 1], arr[high]);
  return (i + 1);
}

void quickSort(std::vector<int>& arr, int low, int high) {
  if (low < high) {
    int pi = partition(arr, low, high);
    quickSort(arr, low, pi - 1);
    quickSort(arr, pi + 1, high);
  }
}"""

MERGESORT_CODE = """void merge(std::vector<int>& arr, int left, int mid, int right) {
  std::vector<int> L(arr.begin() + left, arr.begin() + mid + 1);
  std::vector<int> R(arr.begin() + mid + 1, arr.begin() + right + 1);
  size_t i = 0, j = 0;
  int k = left;
  while (i < L.size() && j < R.size()) {
    if (L[i] <= R[j]) arr[k++] = L[i++];
    else arr[k++] = R[j++];
  }
  while (i < L.size()) arr[k++] = L[i++];
  while (j < R.size()) arr[k++] = R[j++];
}

void mergeSort(std::vector<int>& arr, int left, int right) {
  if (left < right) {
    int mid = left + (right - left) / 2;
    mergeSort(arr, left, mid);
    mergeSort(arr, mid + 1, right);
    merge(arr, left, mid, right);
  }
}"""

HEAPSORT_CODE = """void heapify(std::vector<int>& arr, int n, int i) {
  int largest = i;
  int left = 2 * i + 1;
  int right = 2 * i + 2;
  if (left < n && arr[left] > arr[largest]) largest = left;
  if (right < n && arr[right] > arr[largest]) largest = right;
  if (largest != i) {
    std::swap(arr[i], arr[largest]);
    heapify(arr, n, largest);
  }
}

void heapSort(std::vector<int>& arr) {
  int n = arr.size();
  for (int i = n / 2 - 1; i >= 0; i--)
    heapify(arr, n, i);
  for (int i = n - 1; i > 0; i--) {
    std::swap(arr[0], arr[i]);
    heapify(arr, i, 0);
  }
}"""

CODE: Dict[str, str] = {
    "quicksort": QUICKSORT_CODE,
    "mergesort": MERGESORT_CODE,
    "heapsort":  HEAPSORT_CODE,
}

# lines cycled through while the sort runs
LINE_CYCLE: Dict[str, List[int]] = {
    "quicksort": [line_of(QUICKSORT_CODE, s) for s in (
        "int pivot = arr[high];", "if (arr[j] < pivot) {",
        "std::swap(arr[i], arr[j]);", "quickSort(arr, low, pi - 1);")],
    "mergesort": [line_of(MERGESORT_CODE, s) for s in (
        "int mid = left + (right - left) / 2;", "if (L[i] <= R[j])",
        "else arr[k++] = R[j++];", "merge(arr, left, mid, right);")],
    "heapsort": [line_of(HEAPSORT_CODE, s) for s in (
        "heapify(arr, n, i);", "if (left < n && arr[left]",
        "std::swap(arr[0], arr[i]);", "heapify(arr, i, 0);")],
}

_TITLES = {"quicksort": "Quicksort", "mergesort": "Mergesort", "heapsort": "Heapsort"}


def random_heights(rng: random.Random, size: int = ARRAY_SIZE) -> List[int]:
    return [rng.randint(10, 89) for _ in range(size)]


def arrangement(heights: List[int], sorted_count: int) -> List[int]:
    """Smallest `sorted_count` values in order, then the rest as they started."""
    prefix = sorted(heights)[:sorted_count]
    rest = list(heights)
    for v in prefix:
        rest.remove(v)
    return prefix + rest


def generate(kind: str, rng: Optional[random.Random] = None, total: int = STEP_COUNT) -> List[Step]:
    rng = rng or random.Random()
    heights = random_heights(rng)
    size = len(heights)
    code = CODE[kind]
    cycle = LINE_CYCLE[kind]
    title = _TITLES[kind]

    steps = []
    for s in range(total):
        sorted_count = round((s + 1) * size / total)
        arr = arrangement(heights, sorted_count)
        compare = {s % size, (s + 1) % size}

        sb = StepBuilder(code=code)
        for i, h in enumerate(arr):
            sb.add_node(
                f"arr-{i}", h, 80 + i * 60, 200 - h / 2,
                color=SORTED_COLOR if i < sorted_count else None,
                highlighted=i in compare,
            )
        sb.aux_data["initial"] = list(heights)
        sb.aux_data["sortedCount"] = sorted_count
        sb.highlight_lines = [cycle[s % len(cycle)]]
        sb.message = f"Step {s + 1}: {title} algorithm"
        sb.description = f"{title} step {s + 1}"
        steps.append(sb.build(step=s + 1, total_steps=total))
    return steps
