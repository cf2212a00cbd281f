import pytest

from localdb_lib.exceptions import InvalidInput
from localdb_lib.storage.serializer import JSONSerializer


def test_dump_is_two_space_pretty_json():
    s = JSONSerializer()
    assert s.dump({'a': [1, 2]}) == '{\n  "a": [\n    1,\n    2\n  ]\n}'
    assert s.dump({}) == '{}'
    assert s.dump(None) == 'null'


def test_dump_keeps_unicode():
    assert JSONSerializer().dump({'name': 'Café'}) == '{\n  "name": "Café"\n}'


@pytest.mark.parametrize('bad', [float('nan'), {'a': float('inf')}, {1, 2}, object()])
def test_dump_rejects_non_json_values(bad):
    with pytest.raises(InvalidInput):
        JSONSerializer().dump(bad)


def test_load_goes_through_repair():
    assert JSONSerializer().load('[1, 2,]', 'doc') == [1, 2]
