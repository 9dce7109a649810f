"""
Tests for the template / target / cache diff.
"""

from arbsync.core.bundle import Bundle, FileDiff, diff_bundles


class TestDiff:
    def test_create_and_delete(self):
        template = Bundle({"a": "A", "b": "B"})
        target = Bundle({"b": "B", "c": "C"})

        diff = template.diff(target)

        assert diff.create == {"a"}
        assert diff.delete == {"c"}
        assert diff.update == set()

    def test_create_and_delete_are_disjoint(self):
        template = Bundle({"a": "A", "shared": "S"})
        target = Bundle({"shared": "S", "z": "Z"})

        diff = template.diff(target)

        assert diff.create.isdisjoint(diff.delete)
        assert diff.create == set(template.keys()) - set(target.keys())
        assert diff.delete == set(target.keys()) - set(template.keys())

    def test_update_from_cache(self):
        template = Bundle({"message": "Hello!!"})
        target = Bundle({"message": "Bonjour"})
        cache = Bundle({"message": "Hello"})

        assert template.diff(target, cache).update == {"message"}

    def test_update_independent_of_create(self):
        # Target lost the key but the cache still knows its old source
        template = Bundle({"message": "Hello!!"})
        cache = Bundle({"message": "Hello"})

        diff = template.diff(Bundle(), cache)

        assert diff.create == {"message"}
        assert diff.update == {"message"}

    def test_unchanged_cache_is_not_update(self):
        template = Bundle({"message": "Hello"})
        assert template.diff(Bundle({"message": "Bonjour"}), Bundle({"message": "Hello"})).update == set()

    def test_cached_key_gone_from_template(self):
        template = Bundle({"message": "Hello"})
        cache = Bundle({"removed": "Old"})

        assert template.diff(Bundle(), cache).update == set()

    def test_inputs_are_not_modified(self):
        template = Bundle({"a": "A"})
        target = Bundle({"b": "B"})

        diff_bundles(template, target)

        assert template.to_dict() == {"a": "A"}
        assert target.to_dict() == {"b": "B"}


class TestFileDiffJson:
    def test_sets_serialize_as_sorted_lists(self):
        diff = FileDiff(create={"b", "a"}, delete={"z"}, update=set())

        assert diff.model_dump(mode="json") == {
            "create": ["a", "b"],
            "delete": ["z"],
            "update": [],
        }

    def test_defaults_are_empty(self):
        diff = FileDiff()
        assert not diff.create and not diff.delete and not diff.update
