import unittest
from datetime import timedelta

from api_helpers import PASSWORD, FORM, ApiTestCase


class TestPlansAPI(ApiTestCase):

    def test_health(self):
        self.assertEqual(self.client.get('/health').json(), {"status": "ok"})

    def test_list_and_detail(self):
        data = self.client.get('/api/plans').json()
        self.assertEqual(data['count'], 3)
        self.assertEqual({p['id'] for p in data['plans']}, {"diet", "protein", "royal"})
        royal = self.client.get('/api/plans/royal').json()
        self.assertEqual(royal['unit_price'], 60000)
        self.assertEqual(royal['unit_price_formatted'], "Rp 60.000")
        self.assertEqual(len(royal['default_delivery_days']), 7)
        self.assertEqual(self.client.get('/api/plans/vegan').status_code, 404)

    def test_quote(self):
        resp = self.client.post('/api/plans/quote', json={
            "plan": "protein", "meal_types": ["breakfast", "lunch", "dinner"],
            "delivery_days": ["monday", "tuesday", "wednesday", "thursday", "friday"]})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['total_price'], 2580000)
        self.assertEqual(self.client.post('/api/plans/quote', json={}).json()['total_price'], 0)


class TestSubscriptionsAPI(ApiTestCase):

    def test_create_requires_sign_in_before_validation(self):
        resp = self.client.post('/api/subscriptions', headers=self.csrf, json={"name": "x"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()['error_code'], "AUTHENTICATION_REQUIRED")

    def test_create_requires_anti_forgery_token(self):
        headers = self.login("budi@example.com")
        bare = {"Authorization": headers["Authorization"]}
        resp = self.client.post('/api/subscriptions', headers=bare, json=FORM)
        self.assertEqual(resp.status_code, 429)
        self.assertEqual(resp.json()['error_code'], "SECURITY_CHECK_FAILED")
        self.assertEqual(self.client.get('/api/subscriptions', headers=headers).json()['count'], 0)

    def test_submission_rotates_anti_forgery_token(self):
        headers = self.login("budi@example.com")
        used = dict(headers)
        first = self.client.post('/api/subscriptions', headers=used, json=FORM)
        self.assertEqual(first.status_code, 201)
        fresh = first.headers["X-CSRF-Token"]
        self.assertNotEqual(fresh, used["X-CSRF-Token"])

        replay = self.client.post('/api/subscriptions', headers=used, json=FORM)
        self.assertEqual(replay.status_code, 429)
        self.assertEqual(self.client.get('/api/subscriptions', headers=headers).json()['count'], 1)

        second = self.client.post('/api/subscriptions', headers=dict(used, **{"X-CSRF-Token": fresh}), json=FORM)
        self.assertEqual(second.status_code, 201)

    def test_rejected_form_keeps_token(self):
        headers = self.login("budi@example.com")
        resp = self.client.post('/api/subscriptions', headers=headers, json=dict(FORM, phone="123"))
        self.assertEqual(resp.status_code, 422)
        self.assertNotIn("X-CSRF-Token", resp.headers)
        self.subscribe(headers)

    def test_create_and_read(self):
        headers = self.login("budi@example.com")
        sub = self.subscribe(headers, total_price=5)
        self.assertEqual(sub['total_price'], 774000)
        self.assertEqual(sub['total_price_formatted'], "Rp 774.000")
        self.assertEqual(sub['status'], "active")

        listed = self.client.get('/api/subscriptions', headers=headers).json()
        self.assertEqual(listed['count'], 1)
        one = self.client.get(f"/api/subscriptions/{sub['id']}", headers=headers).json()
        self.assertEqual(one['id'], sub['id'])

    def test_invalid_form_lists_field_errors(self):
        headers = self.login("budi@example.com")
        resp = self.client.post('/api/subscriptions', headers=headers,
                                json=dict(FORM, phone="0812-3456-7890", meal_types=[]))
        self.assertEqual(resp.status_code, 422)
        body = resp.json()
        self.assertEqual(body['error_code'], "VALIDATION_ERROR")
        self.assertIn("phone", body['context']['field_errors'])
        self.assertIn("meal_types", body['context']['field_errors'])

    def test_other_customers_are_denied(self):
        owner = self.login("budi@example.com")
        sub = self.subscribe(owner)
        other = self.login("sari@example.com")
        self.assertEqual(self.client.get(f"/api/subscriptions/{sub['id']}", headers=other).status_code, 403)
        self.assertEqual(self.client.post(f"/api/subscriptions/{sub['id']}/cancel", headers=other).status_code, 403)
        self.assertEqual(self.client.get('/api/subscriptions', headers=other).json()['count'], 0)

    def test_lifecycle_endpoints(self):
        headers = self.login("budi@example.com")
        sub_id = self.subscribe(headers)['id']
        today = self.clock.now.date()

        resp = self.client.post(f'/api/subscriptions/{sub_id}/pause', headers=headers, json={
            "start_date": str(today + timedelta(days=1)), "end_date": str(today + timedelta(days=7))})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()['status'], "paused")

        resp = self.client.post(f'/api/subscriptions/{sub_id}/reactivate', headers=headers)
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()['context'], {"current_status": "paused", "requested_status": "active"})

        self.assertEqual(self.client.post(f'/api/subscriptions/{sub_id}/resume', headers=headers).json()['status'],
                         "active")
        self.assertEqual(self.client.post(f'/api/subscriptions/{sub_id}/cancel', headers=headers).json()['status'],
                         "cancelled")
        resp = self.client.patch(f'/api/subscriptions/{sub_id}/status', headers=headers, json={"status": "active"})
        self.assertEqual(resp.status_code, 200)
        self.assertIsNotNone(resp.json()['reactivated_at'])
        self.assertEqual(resp.json()['total_price'], 774000)

    def test_pause_rejects_bad_dates(self):
        headers = self.login("budi@example.com")
        sub_id = self.subscribe(headers)['id']
        today = self.clock.now.date()
        resp = self.client.post(f'/api/subscriptions/{sub_id}/pause', headers=headers, json={
            "start_date": str(today + timedelta(days=5)), "end_date": str(today + timedelta(days=2))})
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post(f'/api/subscriptions/{sub_id}/pause', headers=headers, json={"start_date": "soon"})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(self.client.get(f'/api/subscriptions/{sub_id}', headers=headers).json()['status'], "active")

    def test_summary(self):
        headers = self.login("budi@example.com")
        self.subscribe(headers)
        second = self.subscribe(headers, plan="royal", meal_types=["dinner"], delivery_days=["sunday"])
        self.client.post(f"/api/subscriptions/{second['id']}/cancel", headers=headers)
        summary = self.client.get('/api/subscriptions/summary', headers=headers).json()
        self.assertEqual(summary['active'], 1)
        self.assertEqual(summary['cancelled'], 1)
        self.assertEqual(summary['monthly_total'], 774000)
        self.assertEqual(summary['monthly_total_formatted'], "Rp 774.000")


class TestAuthAPI(ApiTestCase):

    def test_me_and_sign_out(self):
        headers = self.login("budi@example.com", full_name="Budi")
        me = self.client.get('/api/auth/me', headers=headers).json()
        self.assertEqual(me['email'], "budi@example.com")
        self.assertFalse(me['is_admin'])
        self.client.post('/api/auth/sign-out', headers=headers)
        self.assertEqual(self.client.get('/api/auth/me', headers=headers).status_code, 401)
        self.assertIsNone(self.services.csrf.get(headers["X-Session-Id"]))
        resp = self.client.post('/api/auth/sign-in', headers=headers,
                                json={"email": "budi@example.com", "password": PASSWORD})
        self.assertEqual(resp.status_code, 429)

    def test_sign_in_is_rate_limited(self):
        self.login("budi@example.com")
        for _ in range(5):
            resp = self.client.post('/api/auth/sign-in', headers=self.csrf,
                                    json={"email": "budi@example.com", "password": "Wrong#Pass1"})
            self.assertEqual(resp.status_code, 401)
        resp = self.client.post('/api/auth/sign-in', headers=self.csrf,
                                json={"email": "budi@example.com", "password": PASSWORD})
        self.assertEqual(resp.status_code, 429)
        self.assertEqual(resp.headers['Retry-After'], "300")


if __name__ == '__main__':
    unittest.main()
