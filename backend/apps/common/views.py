import time
import uuid

from django.core.cache import caches
from django.http import JsonResponse

from apps.catalog.repositories import FixedCatalogRepository
from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')


def _session_cache_check(alias='default'):
    """Round-trip a throwaway key through the cache that backs sessions."""
    started = time.time()
    key = f'health:{uuid.uuid4().hex}'
    try:
        cache = caches[alias]
        cache.set(key, 'ok', timeout=5)
        value = cache.get(key)
        cache.delete(key)
    except Exception as e:  # any backend failure means sessions cannot be served
        logger.error('Session cache health check failed', alias=alias, error=str(e), exception=e.__class__.__name__)
        return {'status': 'fail', 'error': str(e), 'exception': e.__class__.__name__}
    latency = round((time.time() - started) * 1000, 2)
    if value != 'ok':
        logger.warning('Session cache health check read back unexpected value', alias=alias)
        return {'status': 'fail', 'error': 'cache read-back mismatch'}
    logger.debug('Session cache health check succeeded', alias=alias, latency_ms=latency)
    return {'status': 'ok', 'latency_ms': latency}


def _catalog_check():
    count = len(FixedCatalogRepository().list())
    if not count:
        logger.warning('Catalog health check found no items')
        return {'status': 'fail', 'error': 'catalog is empty'}
    return {'status': 'ok', 'items': count}


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug('Liveness probe served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: verifies the session cache and the catalog."""
    checks = {
        'session_cache': _session_cache_check(),
        'catalog': _catalog_check(),
    }
    failing = [name for name, r in checks.items() if r.get('status') == 'fail']
    overall_status = 'ok' if not failing else 'degraded'
    http_status = 200 if not failing else 503
    payload = {
        'status': overall_status,
        'checks': checks,
    }
    logger.info('Readiness probe evaluated', status=overall_status, failing_components=failing)
    return JsonResponse(payload, status=http_status)
