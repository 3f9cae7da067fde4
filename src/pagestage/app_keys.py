"""Application keys for type-safe app configuration access."""

from aiohttp import web

from pagestage.core.pipeline import RequestPipeline
from pagestage.core.store import MemoryContentStore
from pagestage.web.session import SessionCodec

pipeline_key = web.AppKey("pipeline", RequestPipeline)
store_key = web.AppKey("store", MemoryContentStore)
session_codec_key = web.AppKey("session_codec", SessionCodec)
admin_host_prefix_key = web.AppKey("admin_host_prefix", str)
