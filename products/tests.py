"""Products app tests."""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from products.models import Product, discounted_price


class DiscountedPriceTests(TestCase):
	def test_rounding_and_bounds(self):
		self.assertEqual(discounted_price(Decimal('1000.00'), 0), Decimal('1000.00'))
		self.assertEqual(discounted_price(Decimal('1000.00'), 100), Decimal('0.00'))
		self.assertEqual(discounted_price(Decimal('999.99'), 15), Decimal('849.99'))
		self.assertEqual(Product(name='X', price=Decimal('3200.00'), discount_percentage=10).effective_price, Decimal('2880.00'))


@override_settings(ALLOWED_HOSTS=['testserver', 'localhost', '127.0.0.1'])
class ProductApiTests(TestCase):
	@classmethod
	def setUpTestData(cls):
		User = get_user_model()
		cls.staff = User.objects.create_user(username='admin_user', password='12345678', is_staff=True)
		cls.customer = User.objects.create_user(username='customer', password='12345678')
		cls.product = Product.objects.create(name='Pashmina Shawl', price=Decimal('6500.00'), discount_percentage=20)

	def test_public_can_list(self):
		res = APIClient().get('/api/products/')
		self.assertEqual(res.status_code, 200)
		self.assertEqual(res.data['count'], 1)
		self.assertEqual(Decimal(res.data['results'][0]['effective_price']), Decimal('5200.00'))

	def test_only_staff_can_write(self):
		customer = APIClient()
		customer.force_authenticate(user=self.customer)
		res = customer.post('/api/products/', data={'name': 'Prayer Mat', 'price': '1800.00'}, format='json')
		self.assertEqual(res.status_code, 403)

		staff = APIClient()
		staff.force_authenticate(user=self.staff)
		res = staff.post('/api/products/', data={'name': 'Prayer Mat', 'price': '1800.00'}, format='json')
		self.assertEqual(res.status_code, 201)
		self.assertEqual(Product.objects.count(), 2)

		res = staff.patch(f'/api/products/{self.product.id}/', data={'discount_percentage': 0}, format='json')
		self.assertEqual(res.status_code, 200)
		self.product.refresh_from_db()
		self.assertEqual(self.product.discount_percentage, 0)

	def test_discount_above_100_rejected(self):
		staff = APIClient()
		staff.force_authenticate(user=self.staff)
		res = staff.post('/api/products/', data={'name': 'Bad', 'price': '100.00', 'discount_percentage': 120}, format='json')
		self.assertEqual(res.status_code, 400)
