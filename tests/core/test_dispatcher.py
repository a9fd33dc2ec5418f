"""
Tests for the scan dispatcher
"""

import asyncio
from collections import defaultdict

import httpx
import pytest

from config import ScanConfig
from core.models import Strategy


class RecordingClient:
    """Stands in for ProbeClient; records probes and replays fixed headers"""

    def __init__(self, headers=None, fail_for=()):
        self.headers = headers if headers is not None else {"Access-Control-Allow-Origin": "*"}
        self.fail_for = set(fail_for)
        self.calls = []
        self.closed = False

    async def probe(self, target, origin):
        from core.errors import NetworkError
        from core.http_client import HTTPResponse

        self.calls.append((target, origin))
        await asyncio.sleep(0)
        if origin in self.fail_for:
            raise NetworkError(target, origin, "connection refused")
        return HTTPResponse(url=target, status_code=200,
                            headers=httpx.Headers(self.headers), elapsed=0.0)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        self.closed = True


def _dispatch(targets, config, client=None, rng=None, **kwargs):
    from core.dispatcher import ScanDispatcher
    from core.sink import MemorySink

    sink = MemorySink()
    dispatcher = ScanDispatcher(config, sink, client=client, rng=rng, **kwargs)
    asyncio.run(dispatcher.run(targets))
    return dispatcher, sink.freeze()


class TestScanDispatcher:
    """Tests for ScanDispatcher"""

    def test_all_strategies_per_target(self, scan_config, fixed_rng):
        """Six probes per target, sent in strategy order"""
        client = RecordingClient()
        targets = ["https://a.example.com", "http://b.example.org:8080/x"]

        dispatcher, results = _dispatch(targets, scan_config, client, fixed_rng)

        by_target = defaultdict(list)
        for target, origin in client.calls:
            by_target[target].append(origin)

        assert by_target["https://a.example.com"] == [
            "a.example.com",
            "null",
            "aaaaaaaaaaaa.com",
            "http://a.example.com",
            "aaaaaaaaaaaaa.example.com",
            "a.aaaaaaaaaaaa.com",
        ]
        assert len(by_target["http://b.example.org:8080/x"]) == 6
        assert len(results) == 12
        assert {r.strategy for r in results} == set(Strategy)
        assert dispatcher.probes_sent == 12
        assert client.closed

    def test_unparsable_target_keeps_hostless_strategies(self, scan_config, fixed_rng):
        client = RecordingClient()

        _, results = _dispatch(["not a url"], scan_config, client, fixed_rng)

        assert [origin for _, origin in client.calls] == ["null", "aaaaaaaaaaaa.com"]
        assert [r.strategy for r in results] == [Strategy.NULL_ORIGIN, Strategy.REFLECTED_ORIGIN]

    def test_no_cors_headers_no_results(self, scan_config, fixed_rng):
        client = RecordingClient(headers={"Server": "nginx"})

        _, results = _dispatch(["https://example.com"], scan_config, client, fixed_rng)

        assert len(client.calls) == 6
        assert results == ()

    def test_network_errors_are_not_fatal(self, scan_config, fixed_rng):
        """A failing probe is skipped and the rest of the target still runs"""
        client = RecordingClient(fail_for={"null"})

        dispatcher, results = _dispatch(
            ["https://a.example.com", "https://b.example.com"], scan_config, client, fixed_rng
        )

        assert len(client.calls) == 12
        assert len(results) == 10
        assert all(r.origin != "null" for r in results)
        assert dispatcher.probes_failed == 2

    def test_probe_logs_carry_target_and_strategy(self, scan_config, fixed_rng, caplog):
        """Per-probe debug records identify the target and the strategy"""
        import logging
        caplog.set_level(logging.DEBUG, logger="core.dispatcher")
        client = RecordingClient(fail_for={"null"})

        _dispatch(["https://a.example.com"], scan_config, client, fixed_rng)

        records = [r for r in caplog.records if getattr(r, "strategy", None)]
        assert len(records) == 6
        assert all(r.target == "https://a.example.com" for r in records)
        failed = [r for r in records if r.strategy == "null-origin"]
        assert "connection refused" in failed[0].getMessage()
        ok = [r for r in records if r.strategy == "existing-policy"]
        assert "HTTP 200" in ok[0].getMessage()

    def test_progress_callback_once_per_target(self, scan_config, fixed_rng, sample_targets):
        done = []

        _dispatch(sample_targets, scan_config, RecordingClient(), fixed_rng,
                  on_target_done=done.append)

        assert sorted(done) == sorted(sample_targets)

    def test_empty_targets_rejected(self, scan_config):
        from core.errors import ConfigurationError

        with pytest.raises(ConfigurationError):
            _dispatch([], scan_config, RecordingClient())

    def test_state_machine(self, scan_config, fixed_rng):
        """Idle -> Running -> Done, and a second run is refused"""
        from core.dispatcher import ScanDispatcher, ScanState
        from core.errors import ScannerError
        from core.sink import MemorySink

        dispatcher = ScanDispatcher(scan_config, MemorySink(), client=RecordingClient(), rng=fixed_rng)
        assert dispatcher.state is ScanState.IDLE

        asyncio.run(dispatcher.run(["https://example.com"]))
        assert dispatcher.state is ScanState.DONE

        with pytest.raises(ScannerError):
            asyncio.run(dispatcher.run(["https://example.com"]))

    def test_cancelled_before_start(self, scan_config, fixed_rng):
        from core.dispatcher import ScanDispatcher, ScanState
        from core.sink import MemorySink
        client = RecordingClient()

        async def run():
            cancel = asyncio.Event()
            cancel.set()
            dispatcher = ScanDispatcher(scan_config, MemorySink(), client=client, rng=fixed_rng)
            await dispatcher.run(["https://a.example.com", "https://b.example.com"], cancel)
            return dispatcher

        dispatcher = asyncio.run(run())

        assert client.calls == []
        assert dispatcher.state is ScanState.DONE


class TestScanOverHTTP:
    """End-to-end scans through httpx.MockTransport"""

    def _scan(self, targets, threads, transport, rng):
        from core.dispatcher import scan
        from core.http_client import ProbeClient

        config = ScanConfig(threads=threads, timeout=5)
        client = ProbeClient(config, rng=rng, transport=transport)
        return scan(targets, config, client=client, rng=rng)

    def test_same_results_for_any_worker_count(self, sample_targets, echo_transport, fixed_rng):
        """One worker and fifty workers record the same set of results"""
        single = self._scan(sample_targets, 1, echo_transport, fixed_rng)
        many = self._scan(sample_targets, 50, echo_transport, fixed_rng)

        assert len(single) == len(many) == 600
        assert set(single) == set(many)

    def test_results_are_complete_records(self, echo_transport, fixed_rng):
        results = self._scan(["https://api.example.com/"], 2, echo_transport, fixed_rng)

        for result in results:
            assert result.url == "https://api.example.com/"
            assert result.headers.acao == result.origin
            assert result.headers.acac == "true"

    def test_request_headers_on_the_wire(self, fixed_rng):
        """Origin, Referer, custom header and cookies reach the server"""
        from core.dispatcher import scan
        from core.http_client import ProbeClient
        seen = []

        def handler(request):
            seen.append(request.headers)
            return httpx.Response(200)

        config = ScanConfig(
            threads=1,
            referer="https://ref.example",
            custom_header="X-Test~~~1",
            cookies=["example.com~~~sid=abc=="],
        )
        client = ProbeClient(config, rng=fixed_rng, transport=httpx.MockTransport(handler))

        results = scan(["https://www.example.com/"], config, client=client, rng=fixed_rng)

        assert results == ()
        assert [h["Origin"] for h in seen][:2] == ["www.example.com", "null"]
        assert all(h["Referer"] == "https://ref.example" for h in seen)
        assert all(h["X-Test"] == "1" for h in seen)
        assert all(h["Cookie"] == "sid=abc==" for h in seen)

    def test_verbose_printing_with_bracketed_headers(self, fixed_rng):
        """Printing each result as it arrives copes with any header text"""
        from rich.console import Console

        from core.dispatcher import scan
        from core.http_client import ProbeClient
        from core.sink import MemorySink
        from reporting.console import print_result

        def handler(request):
            return httpx.Response(200, headers={"Access-Control-Allow-Headers": "[/x]"})

        console = Console(record=True, width=200, force_terminal=False)
        config = ScanConfig(threads=2, verbose=True)
        client = ProbeClient(config, rng=fixed_rng, transport=httpx.MockTransport(handler))
        sink = MemorySink(on_append=lambda result: print_result(result, console))

        results = scan(["https://example.com/"], config, sink, client=client, rng=fixed_rng)

        assert len(results) == len(Strategy)
        assert console.export_text().count("ACAH: [/x]") == len(Strategy)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
