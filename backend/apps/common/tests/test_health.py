import json
import unittest
from unittest import mock
from apps.common import views


class HealthViewsUnitTests(unittest.TestCase):
    def test_live_health_returns_alive_payload(self):
        response = views.live_health(None)
        self.assertEqual(response.status_code, 200)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'alive')

    def test_session_cache_check_round_trips(self):
        result = views._session_cache_check()
        self.assertEqual(result['status'], 'ok')
        self.assertIn('latency_ms', result)

    def test_session_cache_check_reports_backend_errors(self):
        broken = mock.Mock()
        broken.set.side_effect = ConnectionError('cache down')
        with mock.patch('apps.common.views.caches') as caches:
            caches.__getitem__.return_value = broken
            result = views._session_cache_check()
        self.assertEqual(result['status'], 'fail')
        self.assertEqual(result['exception'], 'ConnectionError')

    def test_catalog_check_counts_items(self):
        result = views._catalog_check()
        self.assertEqual(result, {'status': 'ok', 'items': 5})

    @mock.patch('apps.common.views._catalog_check', return_value={'status': 'ok', 'items': 5})
    @mock.patch('apps.common.views._session_cache_check', return_value={'status': 'ok', 'latency_ms': 0.12})
    def test_ready_health_ok_when_dependencies_pass(self, mock_cache_check, mock_catalog_check):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 200)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'ok')
        self.assertEqual(payload['checks']['session_cache'], mock_cache_check.return_value)
        self.assertEqual(payload['checks']['catalog'], mock_catalog_check.return_value)

    @mock.patch('apps.common.views._catalog_check', return_value={'status': 'ok', 'items': 5})
    @mock.patch('apps.common.views._session_cache_check', return_value={'status': 'fail', 'error': 'unreachable'})
    def test_ready_health_degraded_on_cache_failure(self, mock_cache_check, _mock_catalog_check):
        response = views.ready_health(None)
        self.assertEqual(response.status_code, 503)
        payload = json.loads(response.content)
        self.assertEqual(payload['status'], 'degraded')
        self.assertEqual(payload['checks']['session_cache'], mock_cache_check.return_value)
