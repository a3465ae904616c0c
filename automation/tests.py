"""Automation app tests."""

import os
import random
import re
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from io import StringIO
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.db import DatabaseError, OperationalError
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from automation.errors import (
	AutomationDisabled,
	NoFittingProducts,
	NoProductsAvailable,
	PersistenceFailure,
	UpstreamUnavailable,
)
from automation.generator import OrderGenerator, OrderSummary
from automation.identity import CITIES, FIRST_NAMES, LAST_NAMES, random_identity
from automation.lease import BatchLease, acquire_lease, release_lease
from automation.models import AutomationLease, SiteSettings
from automation.scheduler import AutomationScheduler, SchedulerState
from automation.selector import select_items, selection_total
from automation.settings_store import SettingsStore
from core.settings import _env_range
from orders.models import Order, OrderItem
from products.models import Product

PHONE_RE = re.compile(r'^03\d{2}-\d{7}$')
ORDER_CODE_RE = re.compile(r'^CHR-\d{8}-\d{4}$')


def _product(price, discount=0, name='Item'):
	return Product(name=name, price=Decimal(str(price)), discount_percentage=discount)


def _karachi_hour(hour):
	"""UTC instant whose Asia/Karachi (UTC+5) local hour is ``hour``."""
	return datetime(2025, 3, 10, hour, 30, tzinfo=dt_timezone.utc) - timedelta(hours=5)


class SelectorTests(SimpleTestCase):
	"""Budget selector behaviour, using unsaved Product instances."""

	def setUp(self):
		self.catalog = [
			_product(1200, 0, 'A'),
			_product(4500, 10, 'B'),
			_product(9999.99, 25, 'C'),
			_product(15000, 0, 'D'),
			_product(250, 50, 'E'),
			_product(27000, 5, 'F'),
			_product(800, 100, 'G'),
		]

	def test_total_never_exceeds_budget(self):
		for seed in range(300):
			items = select_items(self.catalog, Decimal('30000'), rng=random.Random(seed))
			self.assertLessEqual(selection_total(items), Decimal('30000'))

	def test_at_most_five_distinct_products_with_small_quantities(self):
		for seed in range(200):
			items = select_items(self.catalog, Decimal('30000'), rng=random.Random(seed))
			self.assertLessEqual(len(items), 5)
			names = [item.product.name for item in items]
			self.assertEqual(len(names), len(set(names)))
			for item in items:
				self.assertIn(item.quantity, {1, 2, 3})

	def test_zero_discount_keeps_price(self):
		for seed in range(50):
			for item in select_items([_product('1234.56', 0)], Decimal('30000'), rng=random.Random(seed)):
				self.assertEqual(item.unit_price, Decimal('1234.56'))

	def test_full_discount_is_free(self):
		for seed in range(50):
			items = select_items([_product(999, 100)], Decimal('30000'), rng=random.Random(seed))
			self.assertEqual(len(items), 1)
			self.assertEqual(items[0].unit_price, Decimal('0'))

	def test_single_affordable_product_always_selected(self):
		for seed in range(100):
			items = select_items([_product(1000, 0)], Decimal('30000'), rng=random.Random(seed))
			self.assertEqual(len(items), 1)
			self.assertIn(items[0].quantity, {1, 2, 3})
			self.assertLessEqual(selection_total(items), Decimal('3000'))

	def test_product_above_budget_yields_empty_selection(self):
		for seed in range(50):
			self.assertEqual(select_items([_product(50000, 0)], Decimal('30000'), rng=random.Random(seed)), [])

	def test_same_seed_same_selection(self):
		first = select_items(self.catalog, Decimal('30000'), rng=random.Random(7))
		second = select_items(self.catalog, Decimal('30000'), rng=random.Random(7))
		self.assertEqual(
			[(i.product.name, i.quantity, i.unit_price) for i in first],
			[(i.product.name, i.quantity, i.unit_price) for i in second],
		)

	def test_rejects_empty_catalog_and_bad_budget(self):
		with self.assertRaises(ValueError):
			select_items([], Decimal('30000'))
		with self.assertRaises(ValueError):
			select_items(self.catalog, Decimal('0'))


class IdentityTests(SimpleTestCase):
	def test_phone_numbers_match_mobile_pattern(self):
		rng = random.Random(3)
		for _ in range(500):
			self.assertRegex(random_identity(rng).phone_number, PHONE_RE)

	def test_identity_fields_come_from_pools(self):
		rng = random.Random(11)
		for _ in range(100):
			identity = random_identity(rng)
			first, last = identity.name.split(' ', 1)
			self.assertIn(first, FIRST_NAMES)
			self.assertIn(last, LAST_NAMES)
			self.assertIn(identity.city, CITIES)
			self.assertTrue(identity.address.startswith('House '))
			self.assertTrue(identity.address.endswith(f', {identity.city}'))


class SettingsStoreTests(TestCase):
	def test_defaults_on_first_read(self):
		snapshot = SettingsStore().get()
		self.assertFalse(snapshot.automation_enabled)
		self.assertEqual(snapshot.automation_start_hour, 11)
		self.assertEqual(snapshot.automation_end_hour, 23)
		self.assertEqual(snapshot.automation_timezone, 'Asia/Karachi')
		self.assertEqual(SiteSettings.objects.count(), 1)

	def test_update_returns_fresh_snapshot(self):
		store = SettingsStore()
		before = store.get()
		after = store.update(automation_enabled=True, automation_start_hour=9, automation_end_hour=18)
		self.assertFalse(before.automation_enabled)
		self.assertTrue(after.automation_enabled)
		self.assertEqual((after.automation_start_hour, after.automation_end_hour), (9, 18))
		self.assertEqual(SiteSettings.objects.count(), 1)

	def test_update_rejects_invalid_values(self):
		store = SettingsStore()
		with self.assertRaises(ValueError):
			store.update(automation_start_hour=20, automation_end_hour=11)
		with self.assertRaises(ValueError):
			store.update(automation_end_hour=24)
		with self.assertRaises(ValueError):
			store.update(automation_timezone='Mars/Olympus_Mons')
		with self.assertRaises(ValueError):
			store.update(automation_running=True)
		self.assertEqual(store.get().automation_start_hour, 11)

	def test_window_is_half_open_in_local_time(self):
		snapshot = SettingsStore().update(automation_start_hour=11, automation_end_hour=20)
		self.assertFalse(snapshot.window_open(_karachi_hour(10)))
		self.assertTrue(snapshot.window_open(_karachi_hour(11)))
		self.assertTrue(snapshot.window_open(_karachi_hour(19)))
		self.assertFalse(snapshot.window_open(_karachi_hour(20)))


class OrderGeneratorTests(TestCase):
	def setUp(self):
		self.store = SettingsStore()
		self.store.update(automation_enabled=True)

	def test_disabled_automation_fails_first(self):
		self.store.update(automation_enabled=False)
		with self.assertRaises(AutomationDisabled):
			OrderGenerator(rng=random.Random(1)).generate()

	def test_empty_catalog(self):
		with self.assertRaises(NoProductsAvailable):
			OrderGenerator(rng=random.Random(1)).generate()

	def test_nothing_fits_budget_creates_no_order(self):
		Product.objects.create(name='Gold Set', price=Decimal('50000.00'))
		with self.assertRaises(NoFittingProducts):
			OrderGenerator(rng=random.Random(1)).generate()
		self.assertEqual(Order.objects.count(), 0)

	def test_creates_auto_order_with_matching_total(self):
		Product.objects.create(name='Kurta', price=Decimal('3200.00'), discount_percentage=10)
		Product.objects.create(name='Chappal', price=Decimal('2800.00'))
		Product.objects.create(name='Shawl', price=Decimal('6500.00'), discount_percentage=25)

		generator = OrderGenerator(rng=random.Random(5))
		for _ in range(10):
			summary = generator.generate()
			self.assertIsInstance(summary, OrderSummary)

			order = Order.objects.get(pk=summary.order_id)
			self.assertEqual(order.order_type, Order.OrderType.AUTO)
			self.assertEqual(order.payment_method, Order.PaymentMethod.COD)
			self.assertRegex(order.order_code, ORDER_CODE_RE)
			self.assertRegex(order.phone_number, PHONE_RE)
			self.assertLessEqual(order.total_amount, Decimal('30000'))
			self.assertEqual(order.total_amount, order.items_total())
			self.assertEqual(order.items.count(), summary.items_count)
			self.assertEqual(order.total_amount, summary.total_amount)

		codes = list(Order.objects.values_list('order_code', flat=True))
		self.assertEqual(len(codes), len(set(codes)))

	def test_items_keep_product_snapshot(self):
		product = Product.objects.create(name='Attar', price=Decimal('2400.00'), discount_percentage=20)
		summary = OrderGenerator(rng=random.Random(2)).generate()
		item = OrderItem.objects.get(order_id=summary.order_id)
		self.assertEqual(item.product_name, 'Attar')
		self.assertEqual(item.unit_price, Decimal('1920.00'))
		self.assertEqual(item.discount_percentage, 20)

		product.delete()
		item.refresh_from_db()
		self.assertIsNone(item.product)
		self.assertEqual(item.product_name, 'Attar')

	def test_item_insert_failure_rolls_back_order(self):
		Product.objects.create(name='Kurta', price=Decimal('3200.00'))
		with mock.patch('automation.generator.OrderItem.objects.bulk_create', side_effect=DatabaseError('boom')):
			with self.assertLogs('automation.generator', level='ERROR'):
				with self.assertRaises(PersistenceFailure):
					OrderGenerator(rng=random.Random(1)).generate()
		self.assertEqual(Order.objects.count(), 0)
		self.assertEqual(OrderItem.objects.count(), 0)

	def test_catalog_read_retried_once_then_unavailable(self):
		with mock.patch('automation.generator.time.sleep'), \
				mock.patch.object(Product.objects, 'all', side_effect=OperationalError('gone')) as all_mock:
			with self.assertRaises(UpstreamUnavailable):
				OrderGenerator(rng=random.Random(1)).generate()
		self.assertEqual(all_mock.call_count, 2)

	def test_taken_order_code_falls_back_to_timestamp_code(self):
		Product.objects.create(name='Kurta', price=Decimal('3200.00'))
		Order.objects.create(order_code='CHR-20250310-0007', customer_name='Sara Ahmed', total_amount=Decimal('100.00'))
		with mock.patch('automation.generator.next_order_code', return_value='CHR-20250310-0007'):
			with self.assertLogs('automation.generator', level='WARNING'):
				summary = OrderGenerator(rng=random.Random(1)).generate()
		self.assertRegex(summary.order_code, r'^CHR-\d{13}$')
		order = Order.objects.get(pk=summary.order_id)
		self.assertEqual(order.order_code, summary.order_code)
		self.assertEqual(order.total_amount, order.items_total())
		self.assertEqual(Order.objects.count(), 2)

	@override_settings(ORDER_SYNC_WEBHOOK_URL='https://hooks.example.com/orders')
	def test_sync_failure_does_not_fail_generation(self):
		import requests

		Product.objects.create(name='Kurta', price=Decimal('3200.00'))
		with mock.patch('orders.sync.requests.post', side_effect=requests.ConnectionError('down')) as post:
			with self.captureOnCommitCallbacks(execute=True):
				summary = OrderGenerator(rng=random.Random(1)).generate()
		post.assert_called_once()
		self.assertTrue(Order.objects.filter(pk=summary.order_id).exists())


class FakeLease:
	"""Lease stand-in that is always free."""

	acquired = True

	def __init__(self, **kwargs):
		self.kwargs = kwargs

	def __enter__(self):
		return self

	def __exit__(self, *exc):
		return False


class UnreachableLease(FakeLease):
	def __enter__(self):
		raise DatabaseError('lease table locked')


class UnreleasableLease(FakeLease):
	def __exit__(self, *exc):
		raise DatabaseError('release failed')


class AutomationSchedulerTests(TestCase):
	def setUp(self):
		self.store = SettingsStore()
		self.store.update(automation_enabled=True, automation_start_hour=11, automation_end_hour=20)
		self.generator = mock.Mock()
		self.generator.generate.return_value = OrderSummary(1, 'CHR-20250310-0001', 'Ali Khan', 1, Decimal('1000.00'))
		self.sleep = mock.Mock()

	def _scheduler(self, hour=12, **kwargs):
		kwargs.setdefault('batch_size', (2, 4))
		kwargs.setdefault('lease_factory', FakeLease)
		return AutomationScheduler(
			self.store,
			self.generator,
			rng=random.Random(4),
			clock=lambda: _karachi_hour(hour),
			sleep=self.sleep,
			**kwargs,
		)

	def test_disabled_never_calls_generator(self):
		self.store.update(automation_enabled=False)
		scheduler = self._scheduler()
		for _ in range(5):
			result = scheduler.run()
			self.assertEqual(result.state, SchedulerState.IDLE)
			self.assertFalse(result.success)
			self.assertEqual(result.attempted, 0)
		self.generator.generate.assert_not_called()

	def test_before_window_reports_window_closed(self):
		result = self._scheduler(hour=10).run()
		self.assertEqual(result.state, SchedulerState.WINDOW_CLOSED)
		self.assertEqual(result.attempted, 0)
		self.assertFalse(result.success)
		self.generator.generate.assert_not_called()

	def test_end_hour_is_excluded(self):
		result = self._scheduler(hour=20).run()
		self.assertEqual(result.state, SchedulerState.WINDOW_CLOSED)
		self.assertEqual(result.attempted, 0)

	def test_full_batch_all_succeed(self):
		result = self._scheduler(batch_size=(75, 85)).run()
		self.assertTrue(result.success)
		self.assertEqual(result.state, SchedulerState.COOLDOWN)
		self.assertGreaterEqual(result.attempted, 75)
		self.assertLessEqual(result.attempted, 85)
		self.assertEqual(result.generated, result.attempted)
		self.assertEqual(self.generator.generate.call_count, result.attempted)

	def test_delays_between_calls_only(self):
		result = self._scheduler(batch_size=(5, 5)).run()
		self.assertEqual(result.attempted, 5)
		self.assertEqual(self.sleep.call_count, 4)
		for call in self.sleep.call_args_list:
			self.assertGreaterEqual(call.args[0], 0.2)
			self.assertLessEqual(call.args[0], 0.5)

	def test_failures_do_not_abort_batch(self):
		ok = self.generator.generate.return_value
		self.generator.generate.side_effect = [
			ok, NoFittingProducts(), ok, PersistenceFailure('insert failed'), UpstreamUnavailable(),
		]
		result = self._scheduler(batch_size=(5, 5)).run()
		self.assertTrue(result.success)
		self.assertEqual(result.attempted, 5)
		self.assertEqual(result.generated, 2)
		self.assertEqual(
			[r.get('code') for r in result.results if not r['success']],
			['no_fitting_products', 'persistence_failure', 'upstream_unavailable'],
		)

	def test_unexpected_error_does_not_abort_batch(self):
		ok = self.generator.generate.return_value
		self.generator.generate.side_effect = [ok, RuntimeError('bug'), ok]
		with self.assertLogs('automation.scheduler', level='ERROR'):
			result = self._scheduler(batch_size=(3, 3)).run()
		self.assertTrue(result.success)
		self.assertEqual((result.generated, result.attempted), (2, 3))
		self.assertEqual(self.generator.generate.call_count, 3)
		self.assertEqual(result.results[1], {'success': False, 'code': 'unexpected_error', 'message': 'bug'})

	def test_lease_release_failure_keeps_batch_result(self):
		with self.assertLogs('automation.scheduler', level='ERROR'):
			result = self._scheduler(batch_size=(3, 3), lease_factory=UnreleasableLease).run()
		self.assertTrue(result.success)
		self.assertEqual(result.state, SchedulerState.COOLDOWN)
		self.assertEqual((result.generated, result.attempted), (3, 3))

	def test_lease_unavailable_skips_tick(self):
		with self.assertLogs('automation.scheduler', level='ERROR'):
			result = self._scheduler(lease_factory=UnreachableLease).run()
		self.assertFalse(result.success)
		self.assertEqual(result.state, SchedulerState.IDLE)
		self.assertEqual(result.attempted, 0)
		self.assertIn('Lease unavailable', result.message)
		self.generator.generate.assert_not_called()

	def test_settings_unavailable_skips_tick(self):
		store = mock.Mock()
		store.get.side_effect = OperationalError('connection refused')
		scheduler = AutomationScheduler(
			store, self.generator, rng=random.Random(4), batch_size=(2, 2), sleep=self.sleep, lease_factory=FakeLease,
		)
		with self.assertLogs('automation.scheduler', level='ERROR'):
			result = scheduler.run()
		self.assertFalse(result.success)
		self.assertEqual(result.state, SchedulerState.IDLE)
		self.assertEqual(result.attempted, 0)
		self.assertIn('Settings unavailable', result.message)
		self.generator.generate.assert_not_called()

	def test_unknown_timezone_skips_tick(self):
		SiteSettings.objects.filter(pk=1).update(automation_timezone='Nowhere/City')
		with self.assertLogs('automation.scheduler', level='ERROR'):
			result = self._scheduler().run()
		self.assertFalse(result.success)
		self.assertEqual(result.state, SchedulerState.IDLE)
		self.assertEqual(result.attempted, 0)
		self.assertIn('Nowhere/City', result.message)
		self.generator.generate.assert_not_called()

	@override_settings(AUTOMATION_LEASE_TTL=900, AUTOMATION_HTTP_TIMEOUT=30)
	def test_lease_ttl_covers_slowest_batch(self):
		lease_factory = mock.Mock(return_value=FakeLease())
		scheduler = self._scheduler(batch_size=(85, 85), lease_factory=lease_factory)
		self.assertEqual(scheduler.lease_ttl, 2593)
		scheduler.run()
		lease_factory.assert_called_once_with(ttl_seconds=2593)

	@override_settings(AUTOMATION_LEASE_TTL=900, AUTOMATION_HTTP_TIMEOUT=10)
	def test_lease_ttl_keeps_configured_minimum(self):
		self.assertEqual(self._scheduler(batch_size=(18, 24)).lease_ttl, 900)

	def test_invalid_batch_range_rejected(self):
		with self.assertRaises(ValueError):
			self._scheduler(batch_size=(5, 2))

	def test_busy_when_lease_held(self):
		token = acquire_lease('order-automation', 60)
		self.assertIsNotNone(token)
		scheduler = AutomationScheduler(
			self.store,
			self.generator,
			rng=random.Random(4),
			batch_size=(2, 2),
			clock=lambda: _karachi_hour(12),
			sleep=self.sleep,
		)
		result = scheduler.run()
		self.assertEqual(result.state, SchedulerState.BUSY)
		self.assertEqual(result.attempted, 0)
		self.generator.generate.assert_not_called()

	def test_end_to_end_batch_writes_orders(self):
		Product.objects.create(name='Kurta', price=Decimal('3200.00'))
		Product.objects.create(name='Wallet', price=Decimal('1500.00'), discount_percentage=10)
		scheduler = AutomationScheduler(
			self.store,
			rng=random.Random(9),
			batch_size=(3, 3),
			clock=lambda: _karachi_hour(15),
			sleep=self.sleep,
		)
		result = scheduler.run()
		self.assertEqual((result.generated, result.attempted), (3, 3))
		self.assertEqual(Order.objects.filter(order_type=Order.OrderType.AUTO).count(), 3)
		lease = AutomationLease.objects.get(name='order-automation')
		self.assertEqual(lease.token, '')


class EnvRangeTests(SimpleTestCase):
	def test_parses_bounds(self):
		with mock.patch.dict(os.environ, {'AUTOMATION_BATCH_SIZE': ' 5, 9 '}):
			self.assertEqual(_env_range('AUTOMATION_BATCH_SIZE', '18,24', minimum=1), (5, 9))
		self.assertEqual(_env_range('UNSET_RANGE_FOR_TEST', '0.2,0.5', cast=float), (0.2, 0.5))

	def test_rejects_bad_bounds(self):
		for raw in ('0,3', '9,5'):
			with mock.patch.dict(os.environ, {'AUTOMATION_BATCH_SIZE': raw}):
				with self.assertRaises(ValueError):
					_env_range('AUTOMATION_BATCH_SIZE', '18,24', minimum=1)


class BatchLeaseTests(TestCase):
	def test_second_acquire_blocked_until_release(self):
		token = acquire_lease('batch', 60)
		self.assertIsNotNone(token)
		self.assertIsNone(acquire_lease('batch', 60))
		self.assertFalse(release_lease('batch', 'not-the-token'))
		self.assertTrue(release_lease('batch', token))
		self.assertIsNotNone(acquire_lease('batch', 60))

	def test_expired_lease_is_taken_over(self):
		stale = acquire_lease('batch', 60, now=timezone.now() - timedelta(hours=1))
		fresh = acquire_lease('batch', 60)
		self.assertIsNotNone(fresh)
		self.assertNotEqual(stale, fresh)
		self.assertFalse(release_lease('batch', stale))

	def test_context_manager_releases(self):
		with BatchLease('batch', 60) as lease:
			self.assertTrue(lease.acquired)
			with BatchLease('batch', 60) as other:
				self.assertFalse(other.acquired)
		self.assertEqual(AutomationLease.objects.get(name='batch').token, '')


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class AutomationApiTests(TestCase):
	@classmethod
	def setUpTestData(cls):
		User = get_user_model()
		cls.staff = User.objects.create_user(username='admin_user', password='12345678', is_staff=True)
		cls.customer = User.objects.create_user(username='customer', password='12345678')

	def setUp(self):
		self.client = APIClient()
		self.client.force_authenticate(user=self.staff)

	def test_run_requires_staff(self):
		anon = APIClient()
		self.assertIn(anon.post('/api/automation/run/').status_code, (401, 403))
		customer = APIClient()
		customer.force_authenticate(user=self.customer)
		self.assertEqual(customer.post('/api/automation/run/').status_code, 403)

	def test_run_when_stopped(self):
		res = self.client.post('/api/automation/run/')
		self.assertEqual(res.status_code, 200)
		self.assertFalse(res.data['success'])
		self.assertEqual(res.data['state'], 'idle')
		self.assertEqual(res.data['attempted'], 0)
		self.assertEqual(res.data['generated'], 0)

	@override_settings(AUTOMATION_BATCH_SIZE=(0, 3))
	def test_run_with_invalid_batch_range_reports_error(self):
		res = self.client.post('/api/automation/run/')
		self.assertEqual(res.status_code, 503)
		self.assertFalse(res.data['success'])
		self.assertEqual(res.data['attempted'], 0)
		self.assertEqual(res.data['generated'], 0)
		self.assertIn('Invalid batch size range', res.data['message'])

	def test_generate_single_order(self):
		SettingsStore().update(automation_enabled=True)
		Product.objects.create(name='Kurta', price=Decimal('3200.00'))
		res = self.client.post('/api/automation/generate/')
		self.assertEqual(res.status_code, 201)
		self.assertTrue(res.data['success'])
		self.assertEqual(Order.objects.count(), 1)
		self.assertEqual(res.data['order']['order_code'], Order.objects.get().order_code)

	def test_generate_reports_disabled(self):
		res = self.client.post('/api/automation/generate/')
		self.assertEqual(res.status_code, 200)
		self.assertFalse(res.data['success'])
		self.assertEqual(res.data['code'], 'automation_disabled')

	def test_settings_patch_and_validation(self):
		res = self.client.patch('/api/automation/settings/', data={'automation_enabled': True, 'automation_end_hour': 20}, format='json')
		self.assertEqual(res.status_code, 200)
		self.assertTrue(res.data['automation_enabled'])
		self.assertEqual(res.data['automation_end_hour'], 20)

		res = self.client.patch('/api/automation/settings/', data={'automation_start_hour': 21}, format='json')
		self.assertEqual(res.status_code, 400)

		res = self.client.patch('/api/automation/settings/', data={'automation_timezone': 'Nowhere/City'}, format='json')
		self.assertEqual(res.status_code, 400)
		self.assertEqual(SettingsStore().get().automation_timezone, 'Asia/Karachi')

	def test_public_settings_hide_automation_fields(self):
		SettingsStore().update(ticker_text='Free delivery over PKR 5000')
		res = APIClient().get('/api/site-settings/')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['ticker_text'], 'Free delivery over PKR 5000')
		self.assertNotIn('automation_enabled', res.data)


class RunAutomationCommandTests(TestCase):
	def test_reports_idle_when_stopped(self):
		out = StringIO()
		call_command('run_automation', stdout=out)
		self.assertIn('[idle]', out.getvalue())

	def test_json_output_for_batch(self):
		SettingsStore().update(automation_enabled=True, automation_start_hour=0, automation_end_hour=23)
		Product.objects.create(name='Kurta', price=Decimal('3200.00'))
		out = StringIO()
		with mock.patch('automation.scheduler.timezone.now', return_value=_karachi_hour(12)):
			call_command('run_automation', '--batch-size', '2,2', '--delay', '0,0', '--json', stdout=out)
		self.assertIn('"attempted": 2', out.getvalue())
		self.assertEqual(Order.objects.count(), 2)
