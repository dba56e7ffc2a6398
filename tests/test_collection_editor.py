# ==============================================
# Tests for CriteriaCollectionEditor
# ==============================================

import pytest

from eligibility_criteria.criteria.collection_editor import CriteriaCollectionEditor
from eligibility_criteria.errors import IndexOutOfRangeError


@pytest.fixture
def editor():
    return CriteriaCollectionEditor()


@pytest.fixture
def bucket(codec):
    return [codec.decode("age__gt__int=18"), codec.decode("gender__exact__str=F")]


class TestCriteriaCollectionEditor:

    def test_append_adds_at_end(self, editor, bucket, codec):
        added = codec.decode("income__lt__float=100")
        result = editor.append(bucket, added)
        assert result == [*bucket, added]

    def test_append_does_not_mutate_input(self, editor, bucket, codec):
        editor.append(bucket, codec.decode("income__lt__float=100"))
        assert len(bucket) == 2

    def test_clear(self, editor, bucket):
        assert editor.clear(bucket) == []
        assert len(bucket) == 2

    def test_replace_at(self, editor, bucket, codec):
        replacement = codec.decode("age__gte__int=21")
        result = editor.replace_at(bucket, 0, replacement)
        assert result == [replacement, bucket[1]]
        assert bucket[0].raw == "age__gt__int=18"

    @pytest.mark.parametrize("index", [2, 5, -1])
    def test_replace_out_of_range(self, editor, bucket, codec, index):
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            editor.replace_at(bucket, index, codec.decode("a__eq__str=1"))
        assert exc_info.value.details == {"index": index, "size": 2}

    def test_replace_on_empty_bucket(self, editor, codec):
        with pytest.raises(IndexError):
            editor.replace_at([], 0, codec.decode("a__eq__str=1"))

    def test_remove_at(self, editor, bucket):
        assert editor.remove_at(bucket, 0) == [bucket[1]]

    def test_remove_out_of_range(self, editor, bucket):
        with pytest.raises(IndexOutOfRangeError):
            editor.remove_at(bucket, 2)
