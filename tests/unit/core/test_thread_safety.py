"""
Thread safety of the session manager and of a shared client.
"""

import threading

import requests
import responses

from ean_search.core.executor import CREDITS_HEADER
from ean_search.core.session_manager import ThreadSafeSessionManager

API_URL = "https://api.ean-search.org/api"


class TestThreadSafeSessionManager:

    def test_same_thread_reuses_session(self):
        manager = ThreadSafeSessionManager(requests.Session)

        assert manager.get_session() is manager.get_session()
        assert manager.get_active_sessions_count() == 1
        manager.close_all()

    def test_one_session_per_thread(self):
        manager = ThreadSafeSessionManager(requests.Session)
        sessions = []
        lock = threading.Lock()

        def grab():
            session = manager.get_session()
            with lock:
                sessions.append(session)

        threads = [threading.Thread(target=grab) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len({id(s) for s in sessions}) == 5
        manager.close_all()

    def test_close_all_resets(self):
        created = []

        def factory():
            session = requests.Session()
            created.append(session)
            return session

        manager = ThreadSafeSessionManager(factory)
        first = manager.get_session()

        manager.close_all()
        manager.close_all()

        assert manager.get_active_sessions_count() == 0
        assert manager.get_session() is not first
        assert len(created) == 2
        manager.close_all()


class TestSharedClient:

    @responses.activate
    def test_concurrent_lookups(self, client):
        responses.add(
            responses.GET,
            API_URL,
            body='[{"ean": "5099750442227", "name": "Bohemian Rhapsody"}]',
            headers={CREDITS_HEADER: "100"},
        )
        results = []
        errors = []
        lock = threading.Lock()

        def lookup():
            try:
                for _ in range(10):
                    product = client.barcode_lookup("5099750442227")
                    with lock:
                        results.append(product)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=lookup) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(results) == 80
        assert all(p is not None and p.name == "Bohemian Rhapsody" for p in results)
        assert len(responses.calls) == 80
        assert client.credits_remaining() == 100
