import re

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from urlshortener.models import ShortURLModel
from urlshortener.dao.memory import ShortURLMemoryDAO
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLForbiddenError, ShortURLNotFoundError


class TestShortURLMemoryDAO:
    dao: ShortURLMemoryDAO
    short_url: ShortURLModel

    @pytest.fixture(autouse=True)
    def setup(self, memory_dao: ShortURLMemoryDAO, short_url: ShortURLModel):
        self.dao = memory_dao
        self.short_url = short_url

    def test_insert_and_get(self):
        assert self.dao.insert(self.short_url) is self.dao
        assert self.dao.get('a1b2c3d4') == self.short_url

    def test_get_missing(self):
        assert self.dao.get('missing0') is None

    def test_put_if_absent_reports_creation(self):
        assert self.dao.put_if_absent(self.short_url) is True
        assert self.dao.put_if_absent(self.short_url) is False
        assert len(self.dao.urls) == 1

    def test_reinsert_keeps_original_owner(self):
        self.dao.insert(self.short_url)
        self.dao.insert(ShortURLModel(target=self.short_url.target, shortcode='a1b2c3d4', user_id=9))
        assert self.dao.get('a1b2c3d4').user_id == 1

    def test_insert_conflicting_target(self):
        self.dao.insert(self.short_url)
        other = ShortURLModel(target='https://example.com/other', shortcode='a1b2c3d4', user_id=1)

        with pytest.raises(ShortURLAlreadyExistsError, match=re.escape("Short URL with code 'a1b2c3d4' already exists.")):
            self.dao.insert(other)
        assert self.dao.get('a1b2c3d4').target == self.short_url.target

    def test_restore_overwrites(self):
        self.dao.insert(self.short_url)
        replacement = ShortURLModel(target='https://example.com/other', shortcode='a1b2c3d4', user_id=2)

        self.dao.restore(replacement)
        assert self.dao.get('a1b2c3d4') == replacement

    def test_evict(self):
        self.dao.insert(self.short_url)
        self.dao.evict('a1b2c3d4')
        self.dao.evict('a1b2c3d4')
        assert self.dao.get('a1b2c3d4') is None

    def test_delete_marks_tombstone(self):
        self.dao.insert(self.short_url)

        self.dao.delete('a1b2c3d4', user_id=1)
        self.dao.delete('a1b2c3d4', user_id=1)

        deleted = self.dao.get('a1b2c3d4')
        assert deleted.deleted is True
        assert deleted.target == self.short_url.target

    def test_delete_missing(self):
        with pytest.raises(ShortURLNotFoundError, match=re.escape("Short URL with code 'missing0' not found.")):
            self.dao.delete('missing0', user_id=1)

    def test_delete_not_owner(self):
        self.dao.insert(self.short_url)

        with pytest.raises(ShortURLForbiddenError, match=re.escape("User 2 doesn't own short URL with code 'a1b2c3d4'.")):
            self.dao.delete('a1b2c3d4', user_id=2)
        assert self.dao.get('a1b2c3d4').deleted is False

    def test_list_by_owner(self):
        self.dao.insert(self.short_url)
        self.dao.insert(ShortURLModel(target='https://example.com/2', shortcode='00000002', user_id=1))
        self.dao.insert(ShortURLModel(target='https://example.com/3', shortcode='00000003', user_id=2))
        self.dao.delete('00000002', user_id=1)

        owned = self.dao.list_by_owner(1)
        assert sorted(s.shortcode for s in owned) == ['00000002', 'a1b2c3d4']
        assert self.dao.list_by_owner(3) == []

    def test_max_owner_id(self):
        assert self.dao.max_owner_id() == 0
        self.dao.insert(self.short_url)
        self.dao.insert(ShortURLModel(target='https://example.com/3', shortcode='00000003', user_id=7))
        assert self.dao.max_owner_id() == 7

    def test_ping(self):
        assert self.dao.ping() is True

    def test_recover_and_close_are_noops(self):
        assert self.dao.recover() == 0
        assert self.dao.close() is None

    def test_insert_rejects_wrong_type(self):
        with pytest.raises(BeartypeCallHintParamViolation):
            self.dao.insert({'target': 'https://example.com', 'shortcode': 'a1b2c3d4'})

    def test_repr(self):
        assert repr(self.dao) == '<ShortURLMemoryDAO>'
