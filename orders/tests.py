"""Orders app tests."""

import re
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from unittest import mock

import requests
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from orders.codes import next_order_code
from orders.models import Order, OrderCodeSequence, OrderItem
from orders.sync import OrderSyncNotifier, build_sync_payload
from products.models import Product

WEBHOOK = 'https://hooks.example.com/orders'


def _make_order(code='CHR-20250310-0001', order_type=Order.OrderType.AUTO, items=(('Kurta', '2880.00', 10, 2),)):
	total = sum((Decimal(price) * qty for _, price, _, qty in items), Decimal('0.00'))
	order = Order.objects.create(
		order_code=code,
		customer_name='Ayesha Malik',
		phone_number='0321-1234567',
		address='House 12, Street 4, Clifton',
		city='Karachi',
		total_amount=total,
		order_type=order_type,
	)
	for name, price, discount, qty in items:
		OrderItem.objects.create(
			order=order,
			product_name=name,
			unit_price=Decimal(price),
			discount_percentage=discount,
			quantity=qty,
		)
	return order


class OrderCodeTests(TestCase):
	"""Order code generation and its timestamp fallback."""

	now = datetime(2025, 3, 10, 8, 0, tzinfo=dt_timezone.utc)

	def test_sequence_codes_increment_per_day(self):
		self.assertEqual(next_order_code(now=self.now), 'CHR-20250310-0001')
		self.assertEqual(next_order_code(now=self.now), 'CHR-20250310-0002')
		self.assertEqual(next_order_code(now=datetime(2025, 3, 11, tzinfo=dt_timezone.utc)), 'CHR-20250311-0001')
		self.assertEqual(OrderCodeSequence.objects.get(day=self.now.date()).last_value, 2)

	@override_settings(ORDER_CODE_PREFIX='SHOP')
	def test_prefix_is_configurable(self):
		self.assertEqual(next_order_code(now=self.now), 'SHOP-20250310-0001')

	def test_falls_back_to_timestamp_when_sequence_unavailable(self):
		with mock.patch.object(OrderCodeSequence.objects, 'select_for_update', side_effect=DatabaseError('down')):
			with self.assertLogs('orders.codes', level='WARNING'):
				code = next_order_code(now=self.now)
		self.assertRegex(code, r'^CHR-\d{13}$')

	def test_random_strategy(self):
		rng = mock.Mock()
		rng.randint.return_value = 42
		code = next_order_code(now=self.now, rng=rng, strategy='random')
		self.assertEqual(code, 'CHR-20250310-0042')

	def test_random_strategy_collisions_fall_back(self):
		_make_order(code='CHR-20250310-0042')
		rng = mock.Mock()
		rng.randint.return_value = 42
		with self.assertLogs('orders.codes', level='WARNING'):
			code = next_order_code(now=self.now, rng=rng, strategy='random')
		self.assertTrue(re.match(r'^CHR-\d{13}$', code))


class OrderModelTests(TestCase):
	def test_total_matches_items(self):
		order = _make_order(items=(('Kurta', '2880.00', 10, 2), ('Wallet', '1500.00', 0, 1)))
		self.assertEqual(order.total_amount, Decimal('7260.00'))
		self.assertEqual(order.items_total(), order.total_amount)

	def test_deleting_product_keeps_history(self):
		product = Product.objects.create(name='Kurta', price=Decimal('3200.00'), discount_percentage=10)
		order = _make_order()
		item = order.items.get()
		item.product = product
		item.save()

		product.delete()
		item.refresh_from_db()
		self.assertIsNone(item.product)
		self.assertEqual(item.product_name, 'Kurta')

	def test_deleting_order_deletes_items(self):
		order = _make_order()
		order.delete()
		self.assertEqual(OrderItem.objects.count(), 0)


class SyncPayloadTests(TestCase):
	def setUp(self):
		self.order = _make_order(items=(('Kurta', '2880.00', 10, 2), ('Wallet', '1500.00', 0, 1)))

	def test_flat_record_v2(self):
		payload = build_sync_payload(self.order, 2)
		self.assertEqual(
			set(payload),
			{'payload_version', 'order_id', 'name', 'date', 'contact_number', 'type', 'address', 'time'},
		)
		self.assertEqual(payload['order_id'], 'CHR-20250310-0001')
		self.assertEqual(payload['contact_number'], '0321-1234567')
		self.assertEqual(payload['type'], 'AUTO')
		self.assertRegex(payload['date'], r'^\d{4}-\d{2}-\d{2}$')
		self.assertRegex(payload['time'], r'^\d{2}:\d{2}:\d{2}$')

	def test_sheet_record_v1(self):
		payload = build_sync_payload(self.order, 1)
		self.assertEqual(payload['payload_version'], 1)
		self.assertEqual(payload['products'], 'Kurta x2, Wallet x1')
		self.assertEqual(payload['total_amount'], '7260.00')
		self.assertEqual(payload['payment_method'], 'COD')

	def test_unknown_version(self):
		with self.assertRaises(ValueError):
			build_sync_payload(self.order, 9)


class OrderSyncNotifierTests(TestCase):
	def setUp(self):
		self.order = _make_order()

	def test_missing_url_is_silent_noop(self):
		session = mock.Mock()
		self.assertFalse(OrderSyncNotifier(url='', session=session).deliver(self.order))
		session.post.assert_not_called()

	def test_posts_payload_with_timeout(self):
		session = mock.Mock()
		session.post.return_value = mock.Mock(status_code=200)
		notifier = OrderSyncNotifier(url=WEBHOOK, version=2, timeout=3, session=session)
		self.assertTrue(notifier.deliver(self.order))
		session.post.assert_called_once()
		args, kwargs = session.post.call_args
		self.assertEqual(args[0], WEBHOOK)
		self.assertEqual(kwargs['timeout'], 3)
		self.assertEqual(kwargs['json']['order_id'], self.order.order_code)

	def test_non_2xx_is_logged_and_swallowed(self):
		session = mock.Mock()
		session.post.return_value = mock.Mock(status_code=502)
		with self.assertLogs('orders.sync', level='WARNING') as logs:
			self.assertFalse(OrderSyncNotifier(url=WEBHOOK, session=session).deliver(self.order))
		self.assertIn('502', logs.output[0])

	def test_network_error_is_logged_and_swallowed(self):
		session = mock.Mock()
		session.post.side_effect = requests.Timeout('slow')
		with self.assertLogs('orders.sync', level='WARNING'):
			self.assertFalse(OrderSyncNotifier(url=WEBHOOK, session=session).deliver(self.order))


@override_settings(ORDER_SYNC_WEBHOOK_URL=WEBHOOK)
class OrderSyncSignalTests(TestCase):
	def test_new_order_synced_once_after_commit(self):
		with mock.patch('orders.sync.requests.post') as post:
			post.return_value = mock.Mock(status_code=200)
			with self.captureOnCommitCallbacks(execute=True) as callbacks:
				order = _make_order()
				post.assert_not_called()
			self.assertEqual(len(callbacks), 1)
		post.assert_called_once()
		self.assertEqual(post.call_args.kwargs['json']['order_id'], order.order_code)

	def test_updates_do_not_resync(self):
		order = _make_order()
		with mock.patch('orders.sync.requests.post') as post:
			with self.captureOnCommitCallbacks(execute=True) as callbacks:
				order.city = 'Lahore'
				order.save()
		self.assertEqual(len(callbacks), 0)
		post.assert_not_called()


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class OrderApiTests(TestCase):
	@classmethod
	def setUpTestData(cls):
		User = get_user_model()
		cls.staff = User.objects.create_user(username='admin_user', password='12345678', is_staff=True)
		cls.customer = User.objects.create_user(username='customer', password='12345678')
		_make_order(code='CHR-20250310-0001', order_type=Order.OrderType.AUTO)
		_make_order(code='CHR-20250310-0002', order_type=Order.OrderType.MANUAL, items=(('Wallet', '1500.00', 0, 1),))

	def setUp(self):
		self.client = APIClient()
		self.client.force_authenticate(user=self.staff)

	def test_list_requires_staff(self):
		customer = APIClient()
		customer.force_authenticate(user=self.customer)
		self.assertEqual(customer.get('/api/orders/').status_code, 403)

	def test_list_with_items_and_type_filter(self):
		res = self.client.get('/api/orders/')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['count'], 2)

		res = self.client.get('/api/orders/', {'order_type': 'AUTO'})
		self.assertEqual(res.data['count'], 1)
		order = res.data['results'][0]
		self.assertEqual(order['order_code'], 'CHR-20250310-0001')
		self.assertEqual(order['items_count'], 1)
		self.assertEqual(order['items'][0]['product_name'], 'Kurta')

	def test_orders_are_read_only(self):
		order = Order.objects.first()
		self.assertEqual(self.client.delete(f'/api/orders/{order.id}/').status_code, 405)
		self.assertEqual(self.client.post('/api/orders/', data={}, format='json').status_code, 405)

	def test_stats(self):
		res = self.client.get('/api/orders/stats/')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['orders'], 2)
		self.assertEqual(Decimal(res.data['revenue']), Decimal('7260.00'))
		self.assertEqual(res.data['by_type'], {'AUTO': 1, 'MANUAL': 1})
