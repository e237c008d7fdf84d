import unittest

from kenneldesk.webapp import create_app


class WebAppTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.app = create_app(config={"TESTING": True, "TENANT_ID": "t1"})
        self.client = self.app.test_client()

    def tearDown(self) -> None:
        self.app.extensions["kenneldesk"]["cache"].close()

    def open_panel(self, panel_type: str, props: dict | None = None):
        return self.client.post("/slideout/open", json={"type": panel_type, "props": props or {}})

    def test_closed_view(self) -> None:
        body = self.client.get("/slideout").get_json()
        self.assertFalse(body["is_open"])
        self.assertEqual(body["depth"], 0)
        self.assertIsNone(body["current_panel"])
        self.assertIsNone(self.client.get("/slideout/render").get_json()["panel"])

    def test_open_nested_and_back(self) -> None:
        response = self.open_panel("ownerEdit", {"owner": {"recordId": "o1"}})
        self.assertEqual(response.status_code, 201)
        body = self.open_panel("bookingCreate", {"ownerId": "o1"}).get_json()
        self.assertEqual(body["depth"], 2)
        self.assertEqual(body["current_panel"]["type"], "bookingCreate")
        self.assertEqual(body["current_panel"]["title"], "New Booking")
        self.assertTrue(body["has_back_action"])
        self.assertEqual(body["previous_label"], "Customer")

        body = self.client.post("/slideout/back").get_json()
        self.assertEqual(body["depth"], 1)
        self.assertEqual(body["current_panel"]["type"], "ownerEdit")
        self.assertIsNone(body["redirect"])

    def test_return_to_redirect(self) -> None:
        self.open_panel("ownerEdit")
        body = self.open_panel(
            "taskCreate", {"returnTo": {"label": "Booking", "href": "/bookings/b1"}}
        ).get_json()
        self.assertEqual(body["previous_label"], "Booking")
        self.assertEqual(
            body["current_panel"]["props"]["returnTo"],
            {"label": "Booking", "href": "/bookings/b1"},
        )
        body = self.client.post("/slideout/back").get_json()
        self.assertEqual(body["depth"], 0)
        self.assertEqual(body["redirect"], "/bookings/b1")

    def test_success_invalidates_cache(self) -> None:
        self.client.put("/cache", json={"key": ["bookings"], "data": []})
        self.client.put("/cache", json={"key": ["owner", "o1"], "data": {"name": "Jordan"}})
        self.client.put("/cache", json={"key": ["tasks"], "data": []})
        self.open_panel("ownerEdit", {"owner": {"recordId": "o1"}})
        self.open_panel("bookingCreate", {"ownerId": "o1"})

        body = self.client.post(
            "/slideout/success", json={"result": {"bookingId": "b1", "ownerId": "o1"}}
        ).get_json()
        self.assertEqual(body["message"], "Booking created successfully")
        self.assertEqual(body["depth"], 1)
        self.assertEqual(body["current_panel"]["type"], "ownerEdit")

        entries = {tuple(entry["key"]): entry["stale"] for entry in self.client.get("/cache").get_json()["entries"]}
        self.assertEqual(
            entries, {("bookings",): True, ("owner", "o1"): True, ("tasks",): False}
        )

    def test_close(self) -> None:
        self.open_panel("ownerEdit")
        self.open_panel("petCreate")
        body = self.client.post("/slideout/close").get_json()
        self.assertFalse(body["is_open"])
        self.assertFalse(self.client.post("/slideout/close").get_json()["is_open"])

    def test_render_unknown_type(self) -> None:
        self.open_panel("unknown-type")
        panel = self.client.get("/slideout/render").get_json()["panel"]
        self.assertEqual(panel["title"], "Panel")
        self.assertEqual(panel["form"]["message"], "Unknown panel type: unknown-type")

    def test_validation_errors(self) -> None:
        self.assertEqual(self.client.post("/slideout/open", json={}).status_code, 400)
        response = self.client.post("/slideout/open", json={"type": "ownerEdit", "props": []})
        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.get_json())
        response = self.open_panel("taskCreate", {"returnTo": {"label": "Booking"}})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.client.post("/slideout/success", json={}).status_code, 400)
        self.assertEqual(self.client.put("/cache", json={"key": "bookings"}).status_code, 400)


if __name__ == "__main__":
    unittest.main()
