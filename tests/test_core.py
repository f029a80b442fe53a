import pytest

from pushrelay import core


def test_is_local_queue_true():
    assert core.is_local_queue(core.QueueEngine.LOCAL) is True
    assert core.is_local_queue(core.QueueEngine("local")) is True


@pytest.mark.parametrize("engine", ["nsq", "nats", "redis"])
def test_is_local_queue_false(engine):
    assert core.is_local_queue(core.QueueEngine(engine)) is False


def test_unknown_queue_engine_raises():
    with pytest.raises(ValueError):
        core.QueueEngine("kafka")


def test_platform_lookup_by_number():
    assert core.Platform(2) is core.Platform.ANDROID


def test_incomplete_storage_cannot_be_built():
    with pytest.raises(TypeError):
        core.Storage()

    class Partial(core.Storage):
        def init(self):
            pass

    with pytest.raises(TypeError):
        Partial()


def test_health_subclass_check():
    class Always(core.Health):
        def check(self):
            return True

    assert Always().check() is True
    with pytest.raises(TypeError):
        core.Health()