import pytest

from editos.klog import (
    BufferedSink,
    CallbackSink,
    KernelPanic,
    Loggable,
    LoggingSink,
    log_msg,
    log_obj,
    panic,
    set_sink,
)


class Recorder(LoggingSink):
    def __init__(self):
        self.chars = []

    def put_char(self, c):
        self.chars.append(c)

    @property
    def text(self):
        return "".join(self.chars)


class Thing(Loggable):
    def __init__(self, v):
        self.v = v

    def log_self(self):
        log_obj("{v=%u}", self.v)


@pytest.fixture
def rec():
    r = Recorder()
    set_sink(r)
    yield r
    set_sink(None)


def test_plain_message_gets_newline(rec):
    log_msg("hello")
    assert rec.text == "hello\n"


def test_trailing_backslash_suppresses_newline(rec):
    log_msg("abc\\")
    assert rec.text == "abc"


def test_inner_backslash_is_kept(rec):
    log_msg("a\\b")
    assert rec.text == "a\\b\n"


def test_integers(rec):
    log_msg("%d %i %u", -42, 17, 99)
    assert rec.text == "-42 17 99\n"


def test_hex_and_pointer(rec):
    log_msg("%x %p", 0xABC, 0xABC)
    assert rec.text == "0xABC 0xabc\n"


def test_null_values(rec):
    log_msg("%s %p %o", None, None, None)
    assert rec.text == "<null> <null> <null>\n"


def test_char_and_string(rec):
    log_msg("%c%c %s", "x", ord("y"), "word")
    assert rec.text == "xy word\n"


def test_percent_escapes(rec):
    log_msg("100%% %q 50%")
    assert rec.text == "100% %q 50%\n"


def test_loggable_object(rec):
    log_msg("obj %o!", Thing(7))
    assert rec.text == "obj {v=7}!\n"


def test_log_obj_has_no_newline(rec):
    log_obj("%s", "x")
    assert rec.text == "x"


def test_missing_argument(rec):
    with pytest.raises(TypeError):
        log_msg("%d")


def test_output_discarded_without_sink():
    r = Recorder()
    set_sink(None)
    log_msg("lost")
    set_sink(r)
    log_msg("kept")
    set_sink(None)
    assert r.text == "kept\n"


def test_callback_sink():
    got = []
    other = []
    sink = CallbackSink(got.append)
    sink.put_char("a")
    sink.set_callback(other.append)
    sink.put_char("b")
    sink.set_callback(None)
    sink.put_char("c")
    assert got == ["a"]
    assert other == ["b"]


def test_buffered_sink_replays_to_new_subs():
    buf = BufferedSink(2)
    for c in "hi":
        buf.put_char(c)
    first = Recorder()
    buf.add_sub(first)
    buf.put_char("!")
    second = Recorder()
    buf.add_sub(second)
    assert first.text == "hi!"
    assert second.text == "hi!"
    buf.reflush()
    assert first.text == "hi!hi!"


def test_buffered_sink_limits_subs():
    buf = BufferedSink(1)
    buf.add_sub(Recorder())
    with pytest.raises(ValueError):
        buf.add_sub(Recorder())


def test_buffered_sink_empties_when_full():
    buf = BufferedSink(1, capacity=4)
    for c in "abcde":
        buf.put_char(c)
    late = Recorder()
    buf.add_sub(late)
    assert late.text == "e"


def test_panic_raises_and_logs(rec):
    with pytest.raises(KernelPanic) as info:
        panic("bad %d", 3)
    assert info.value.message == "bad 3"
    assert info.value.function == "test_panic_raises_and_logs"
    assert rec.text.startswith("\n[KERNEL PANIC] bad 3\nat ")
    assert "in `test_panic_raises_and_logs`" in rec.text