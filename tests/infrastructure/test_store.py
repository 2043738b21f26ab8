"""Tests for SheetStore: engine ownership and transaction boundaries."""

from __future__ import annotations

import threading
from datetime import date
from pathlib import Path

import pytest

from signsheet.domain import YearSignInRegister
from signsheet.infrastructure.store import SheetStore
from tests.conftest import make_store


class TestSheetStore:
    def test_creates_database(self, tmp_path: Path) -> None:
        s = make_store(tmp_path)
        try:
            assert s.db_path == tmp_path / ".signsheet" / "signsheet.db"
            assert s.db_path.exists()
        finally:
            s.close()

    def test_store_directory_from_settings(self, tmp_path: Path) -> None:
        s = make_store(tmp_path, store={"directory": "data", "filename": "att.db"})
        try:
            assert s.db_path == tmp_path / "data" / "att.db"
        finally:
            s.close()

    def test_transaction_commits(self, store: SheetStore) -> None:
        with store.transaction() as repo:
            repo.save("alice", YearSignInRegister.fresh(2024))
        with store.connect() as repo:
            assert repo.exists("alice", 2024)

    def test_transaction_rolls_back_on_error(self, store: SheetStore) -> None:
        reg = YearSignInRegister.fresh(2024)
        with pytest.raises(RuntimeError), store.transaction() as repo:
            repo.save("alice", reg)
            raise RuntimeError("boom")
        with store.connect() as repo:
            assert not repo.exists("alice", 2024)

    def test_load_mutate_save(self, store: SheetStore) -> None:
        with store.transaction() as repo:
            repo.save("alice", YearSignInRegister.fresh(2024))
        with store.transaction() as repo:
            reg = repo.get("alice", 2024)
            assert reg is not None
            reg.sign_in_today(date(2024, 5, 1))
            repo.save("alice", reg)
        with store.connect() as repo:
            loaded = repo.get("alice", 2024)
        assert loaded is not None
        assert loaded.is_signed_in(date(2024, 5, 1))


class TestConcurrentWriters:
    """Two stores on one database file, as two CLI processes would be."""

    def _sign_in_from_other_store(
        self, root: Path, day: date, has_read: threading.Event, errors: list[Exception]
    ) -> None:
        other = make_store(root)
        try:
            with other.transaction() as repo:
                reg = repo.get("alice", 2024)
                has_read.set()
                assert reg is not None
                reg.sign_in_today(day)
                repo.save("alice", reg)
        except Exception as exc:
            errors.append(exc)
        finally:
            other.close()

    def test_interleaved_sign_ins_are_both_kept(self, tmp_path: Path) -> None:
        first = make_store(tmp_path)
        try:
            with first.transaction() as repo:
                repo.save("alice", YearSignInRegister.fresh(2024))

            has_read = threading.Event()
            errors: list[Exception] = []
            with first.transaction() as repo:
                reg = repo.get("alice", 2024)
                assert reg is not None
                worker = threading.Thread(
                    target=self._sign_in_from_other_store,
                    args=(tmp_path, date(2024, 1, 2), has_read, errors),
                )
                worker.start()
                # The other writer must not get to read the stale row meanwhile.
                assert not has_read.wait(timeout=0.5)
                reg.sign_in_today(date(2024, 1, 1))
                repo.save("alice", reg)
            worker.join(timeout=10)

            assert not worker.is_alive()
            assert errors == []
            with first.connect() as repo:
                loaded = repo.get("alice", 2024)
            assert loaded is not None
            assert loaded.list_signed_in_days() == [date(2024, 1, 1), date(2024, 1, 2)]
        finally:
            first.close()

    def test_reads_do_not_wait_for_a_writer(self, tmp_path: Path) -> None:
        writer, reader = make_store(tmp_path), make_store(tmp_path)
        try:
            with writer.transaction() as repo:
                repo.save("alice", YearSignInRegister.fresh(2024))
            with writer.transaction() as repo:
                reg = repo.get("alice", 2024)
                assert reg is not None
                reg.sign_in_today(date(2024, 3, 1))
                repo.save("alice", reg)
                with reader.connect() as other:
                    committed = other.get("alice", 2024)
                assert committed is not None
                assert committed.count_sign_in_days() == 0
        finally:
            writer.close()
            reader.close()
