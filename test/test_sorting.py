import pyarrow as pa
import pytest

from tidyground.compute.base import QueryPlanNode
from tidyground.compute.pagination import PaginateNode
from tidyground.compute.sorting import SortNode


class MockQueryPlanNode(QueryPlanNode):
    def __init__(self, batches):
        self._batches = batches
        self.closed = False

    def batches(self):
        try:
            for batch in self._batches:
                yield batch
        finally:
            self.closed = True

    def __str__(self):
        return "MockQueryPlanNode"


def test_sort_node_single_batch():
    data = pa.record_batch({"lifeExp": [43.8, 76.4, 72.3]})
    sort_node = SortNode(["lifeExp"], [False], MockQueryPlanNode([data]))

    batches = list(sort_node.batches())
    assert len(batches) == 1
    assert batches[0].column(0).to_pylist() == [43.8, 72.3, 76.4]


def test_sort_node_multiple_batches():
    child_node = MockQueryPlanNode(
        [
            pa.record_batch({"year": [2007, 1952]}),
            pa.record_batch({"year": [1977, 1957]}),
        ]
    )
    sort_node = SortNode(["year"], [False], child_node)
    values = [v for batch in sort_node.batches() for v in batch.column(0).to_pylist()]
    assert values == [1952, 1957, 1977, 2007]


def test_sort_node_descending():
    data = pa.record_batch({"year": [1952, 1957, 1962]})
    sort_node = SortNode(["year"], [True], MockQueryPlanNode([data]))
    assert next(sort_node.batches()).column(0).to_pylist() == [1962, 1957, 1952]


def test_sort_node_multiple_keys():
    data = pa.record_batch(
        {"continent": ["Europe", "Asia", "Europe", "Asia"], "lifeExp": [80.5, 82.6, 81.7, 43.8]}
    )
    sort_node = SortNode(["continent", "lifeExp"], [False, True], MockQueryPlanNode([data]))
    result = next(sort_node.batches())
    assert result.column(0).to_pylist() == ["Asia", "Asia", "Europe", "Europe"]
    assert result.column(1).to_pylist() == [82.6, 43.8, 81.7, 80.5]


def test_sort_node_no_batches():
    assert list(SortNode(["year"], [False], MockQueryPlanNode([])).batches()) == []


def test_sort_node_invalid_keys_and_descending_length():
    data = pa.record_batch({"year": [1, 2, 3]})
    with pytest.raises(ValueError):
        SortNode(["year"], [True, False], MockQueryPlanNode([data]))


def test_sort_node_with_paginate_node():
    child_node = MockQueryPlanNode(
        [
            pa.record_batch({"values": [5, 3, 1, 4, 2]}),
            pa.record_batch({"values": [6, 9, 8, 7, 10]}),
        ]
    )
    sort_node = SortNode(["values"], [False], child_node)
    paginate_node = PaginateNode(offset=0, length=2, child=sort_node)

    first_page = next(paginate_node.batches())
    assert first_page["values"].to_pylist() == [1, 2]


@pytest.mark.parametrize(
    "offset, length, expected",
    [
        (0, 2, [1, 2]),
        (1, 3, [2, 3, 4]),
        (2, 4, [3, 4, 5, 6]),
        (4, 10, [5, 6, 7, 8, 9]),
        (0, 0, []),
        (20, 5, []),
    ],
)
def test_paginate_across_batches(offset, length, expected):
    child_node = MockQueryPlanNode(
        [
            pa.record_batch({"values": [1, 2, 3]}),
            pa.record_batch({"values": [4, 5, 6]}),
            pa.record_batch({"values": [7, 8, 9]}),
        ]
    )
    batches = list(PaginateNode(offset, length, child_node).batches())
    assert [v for b in batches for v in b["values"].to_pylist()] == expected
    # Even when no rows are selected, the schema reaches the consumer.
    assert batches[0].schema.names == ["values"]


def test_paginate_closes_child():
    child_node = MockQueryPlanNode(
        [pa.record_batch({"values": [1, 2]}), pa.record_batch({"values": [3, 4]})]
    )
    batches = PaginateNode(0, 1, child_node).batches()
    next(batches)
    batches.close()
    assert child_node.closed


def test_paginate_negative_length():
    with pytest.raises(ValueError):
        PaginateNode(0, -1, MockQueryPlanNode([]))
