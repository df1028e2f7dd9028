import asyncio

import httpx
import pytest

from config import UpstreamConfig

META_URL = "https://meta.test/get-dispute-metaevidence"
GATEWAY = "https://ipfs.test"
SUBGRAPH_URLS = {1: "https://graph.test/mainnet", 100: "https://graph.test/gnosis"}


def subgraph_payload(*evidence):
    return {"data": {"dispute": {"evidenceGroup": {"evidence": list(evidence)}}}}


def submission(uri, sender="0xabc", creation_time="1700000000"):
    return {"URI": uri, "sender": sender, "creationTime": creation_time}


class FakeUpstreams:
    """
    MockTransport handler routing by host. Every request is recorded in `calls`.
    `ipfs` maps a gateway path to an httpx.Response or a handler(request).
    """

    def __init__(self):
        self.calls = []
        self.meta = lambda request: httpx.Response(404)
        self.subgraph = lambda request: httpx.Response(200, json={"data": {"dispute": None}})
        self.ipfs = {}

    def __call__(self, request: httpx.Request):
        self.calls.append(request)
        host = request.url.host
        if host == "meta.test":
            return self.meta(request)
        if host == "graph.test":
            return self.subgraph(request)
        if host == "ipfs.test":
            handler = self.ipfs.get(request.url.path)
            if handler is None:
                return httpx.Response(404)
            return handler(request) if callable(handler) else handler
        raise AssertionError(f"unexpected request to {request.url}")

    def calls_to(self, host):
        return [c for c in self.calls if c.url.host == host]


@pytest.fixture
def upstreams():
    return FakeUpstreams()


@pytest.fixture
def upstream_config():
    return UpstreamConfig(
        meta_evidence_url=META_URL,
        ipfs_gateway=GATEWAY,
        subgraph_urls=SUBGRAPH_URLS,
        meta_evidence_timeout=1.0,
        subgraph_timeout=1.0,
        ipfs_timeout=1.0,
        max_concurrent_content_fetches=0,
    )


@pytest.fixture
def run_with_client(upstreams):
    """Run `fn(client)` on a fresh event loop with an AsyncClient wired to `upstreams`."""

    def run(fn):
        async def main():
            async with httpx.AsyncClient(transport=httpx.MockTransport(upstreams)) as client:
                return await fn(client)

        return asyncio.run(main())

    return run
