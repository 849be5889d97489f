"""Integration tests for scoped lifetime management."""

import threading

from simple_service_container import IDisposable, ServiceContainer


class RequestId:
    def __init__(self):
        self.value = id(self)


class RequestLogger:
    def __init__(self, request_id: RequestId):
        self.request_id = request_id


class RequestHandler:
    def __init__(self, request_id: RequestId, logger: RequestLogger):
        self.request_id = request_id
        self.logger = logger


class Session(IDisposable):
    def __init__(self):
        self.dispose_count = 0

    def dispose(self):
        self.dispose_count += 1


class TestScopedLifetimeScenarios:
    """Realistic scoped lifetime scenarios."""

    def test_request_scoped_context(self):
        container = ServiceContainer()
        container.register_scoped(RequestId)
        container.register_scoped(RequestLogger)
        container.register_transient(RequestHandler)

        with container.create_scope() as scope1:
            handler1 = scope1.resolve(RequestHandler)
            logger1 = scope1.resolve(RequestLogger)

            assert handler1.request_id is logger1.request_id
            assert handler1.logger is logger1

        with container.create_scope() as scope2:
            handler2 = scope2.resolve(RequestHandler)

            assert handler2.request_id is not handler1.request_id
            assert handler2.logger is not handler1.logger

    def test_closing_one_scope_leaves_other_open(self):
        container = ServiceContainer()
        container.register_scoped(Session)
        scope1 = container.create_scope()
        scope2 = container.create_scope()
        session1 = scope1.resolve(Session)
        session2 = scope2.resolve(Session)

        scope1.close()

        assert session1.dispose_count == 1
        assert session2.dispose_count == 0
        assert scope2.resolve(Session) is session2

        scope2.close()
        assert session2.dispose_count == 1

    def test_closing_scope_keeps_singletons(self):
        class Pool(IDisposable):
            def __init__(self):
                self.disposed = False

            def dispose(self):
                self.disposed = True

        container = ServiceContainer()
        container.register_singleton(Pool)
        container.register_scoped(Session)

        with container.create_scope() as scope:
            pool = scope.resolve(Pool)
            scope.resolve(Session)

        assert not pool.disposed
        assert container.resolve(Pool) is pool

        container.close()
        assert pool.disposed

    def test_closing_container_does_not_dispose_scoped(self):
        container = ServiceContainer()
        container.register_scoped(Session)
        scope = container.create_scope()
        session = scope.resolve(Session)

        container.close()

        assert session.dispose_count == 0
        scope.close()
        assert session.dispose_count == 1

    def test_scopes_on_separate_threads_are_isolated(self):
        container = ServiceContainer()
        container.register_scoped(RequestId)
        results = {}

        def handle_request(name):
            with container.create_scope() as scope:
                first = scope.resolve(RequestId)
                second = scope.resolve(RequestId)
                results[name] = (first, second)

        threads = [threading.Thread(target=handle_request, args=(f"request-{i}",)) for i in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(first is second for first, second in results.values())
        instances = {id(first) for first, _ in results.values()}
        assert len(instances) == 5

    def test_many_scoped_services_disposed_newest_first(self):
        order = []

        class Outer(IDisposable):
            def __init__(self, session: Session):
                self.session = session

            def dispose(self):
                order.append("outer")

        class TrackedSession(Session):
            def dispose(self):
                order.append("session")

        container = ServiceContainer()
        container.register_scoped(Session, TrackedSession)
        container.register_scoped(Outer)

        with container.create_scope() as scope:
            scope.resolve(Outer)

        # Session finishes construction first, so it is disposed last
        assert order == ["outer", "session"]
