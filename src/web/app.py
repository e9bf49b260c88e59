#!/usr/bin/env python3
"""
Web UI for MorningPost.

Serves a page of randomly picked news from the registered feeds and a small
form to manage those feeds. Blocking work (HTTP fetches, feed discovery) runs
in the default executor so the event loop keeps serving requests.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from aiohttp import web
from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.container import Container, get_container
from core.exceptions import AggregationError, SamplingError, MorningPostError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / 'templates'

CONTAINER_KEY = web.AppKey('container', Container)
TEMPLATES_KEY = web.AppKey('templates', Environment)

BAD_REQUEST_NO_URL = "bad request: please, inform the URL"


def create_template_env(templates_dir: Optional[Path] = None) -> Environment:
    """Jinja2 environment for the page templates."""
    return Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=select_autoescape(['html', 'xml']),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render(request: web.Request, template_name: str, status: int = 200, **context) -> web.Response:
    template = request.app[TEMPLATES_KEY].get_template(template_name)
    return web.Response(
        text=template.render(**context),
        status=status,
        content_type='text/html',
    )


@web.middleware
async def log_requests(request: web.Request, handler):
    logger.info(f"{request.method} {request.path}")
    return await handler(request)


async def home(request: web.Request) -> web.Response:
    """Aggregate the registered feeds and show a random page of news."""
    container = request.app[CONTAINER_KEY]
    aggregator = container.get('feed_aggregator')
    sampler = container.get('sampler')

    loop = asyncio.get_running_loop()
    try:
        await loop.run_in_executor(None, aggregator.get_news)
    except AggregationError as e:
        logger.error(f"Aggregation failed for {e.failed_sources} source(s): {e}")

    try:
        sampler.random_news(aggregator.pool.items())
    except SamplingError as e:
        logger.warning(f"Keeping previous page: {e}")

    return render(request, 'home.html', news=sampler.page_news)


async def feeds_head(request: web.Request) -> web.Response:
    return web.Response(status=200)


async def feeds_list(request: web.Request) -> web.Response:
    store = request.app[CONTAINER_KEY].get('feed_store')
    return _render_feeds(request, store)


async def feeds_add(request: web.Request) -> web.Response:
    """Register every feed found behind the posted URL."""
    container = request.app[CONTAINER_KEY]
    form = await request.post()
    url = (form.get('url') or '').strip()
    if not url:
        return web.Response(status=400, text=BAD_REQUEST_NO_URL)

    finder = container.get('feed_finder')
    loop = asyncio.get_running_loop()
    try:
        feeds = await loop.run_in_executor(None, finder.find_feeds, url)
    except MorningPostError as e:
        logger.error(f"Cannot add feeds from {url}: {e}")
        return web.Response(status=500, text=str(e))

    store = container.get('feed_store')
    for feed in feeds:
        store.add(feed)
    if not feeds:
        logger.warning(f"No feeds found at {url}")

    return _render_feeds(request, store)


async def feeds_delete(request: web.Request) -> web.Response:
    store = request.app[CONTAINER_KEY].get('feed_store')
    feed_id = request.match_info['feed_id']
    if not store.delete(feed_id):
        logger.warning(f"Feed {feed_id} not found")
    return _render_feeds(request, store)


def _render_feeds(request: web.Request, store) -> web.Response:
    feeds = sorted(store.get_all(), key=lambda f: f.endpoint)
    return render(request, 'feeds.html', feeds=feeds)


async def save_store(app: web.Application) -> None:
    """Persist the registered feeds when the server stops."""
    container = app[CONTAINER_KEY]
    if not container.has('feed_store'):
        return
    try:
        container.get('feed_store').save()
    except MorningPostError as e:
        logger.error(f"Failed to save feed store: {e}")


def create_app(container: Optional[Container] = None,
               templates_dir: Optional[Path] = None) -> web.Application:
    """
    Build the web application.

    Args:
        container: Service container (the global one by default)
        templates_dir: Alternative template directory

    Returns:
        aiohttp application ready to be served
    """
    app = web.Application(middlewares=[log_requests])
    app[CONTAINER_KEY] = container or get_container()
    app[TEMPLATES_KEY] = create_template_env(templates_dir)

    app.router.add_get('/', home)
    app.router.add_head('/feeds/', feeds_head)
    app.router.add_get('/feeds/', feeds_list, allow_head=False)
    app.router.add_post('/feeds/', feeds_add)
    app.router.add_delete('/feeds/{feed_id}', feeds_delete)
    app.router.add_post('/feeds/{feed_id}/delete', feeds_delete)

    app.on_cleanup.append(save_store)
    return app


def run(container: Optional[Container] = None, port: Optional[int] = None) -> None:
    """Serve the web UI until SIGINT or SIGTERM."""
    app = create_app(container)
    port = port or app[CONTAINER_KEY].get('config').app.listen_port
    logger.info(f"Listening on http://localhost:{port}")
    web.run_app(app, port=port, print=None)
