"""API tests for /blogs, /events and /news: visibility, validation and the edit/delete policy."""

import json
import unittest

from support import ApiTestCase


class ContentApiTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.root = self.client_for(self.SUPERADMIN_EMAIL)
        self.alice = self.client_for(self.ADMIN_EMAIL)
        self.bob = self.client_for(self.OTHER_ADMIN_EMAIL)

    def create_blog(self, client, **fields: object) -> dict:
        body = {"blog_title": "Flu Season Tips", "blog_content": "<p>Wash hands.</p>"}
        body.update(fields)
        resp = client.post(self.url("/blogs"), json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()


class TestBlogs(ContentApiTestCase):
    def test_create_defaults_slug_and_author(self) -> None:
        created = self.create_blog(self.alice)
        self.assertEqual(created["message"], "Blog post created successfully")
        self.assertTrue(created["slug"].startswith("flu-season-tips-"))

        blog = self.alice.get(self.url(f"/blogs/{created['id']}")).json()
        self.assertEqual(blog["blog_author"], "Alice")
        self.assertEqual(blog["created_by"], self.admin_id)
        self.assertFalse(blog["blog_ispub"])

    def test_create_requires_title_and_content(self) -> None:
        resp = self.alice.post(self.url("/blogs"), json={"blog_title": "Only a title"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Title and content are required")

    def test_create_requires_session(self) -> None:
        resp = self.client.post(
            self.url("/blogs"), json={"blog_title": "T", "blog_content": "C"}
        )
        self.assertEqual(resp.status_code, 401)

    def test_duplicate_slug_rejected(self) -> None:
        self.create_blog(self.alice, blog_slug="flu-tips")
        resp = self.alice.post(
            self.url("/blogs"),
            json={"blog_title": "Again", "blog_content": "C", "blog_slug": "flu-tips"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Slug already in use")

    def test_drafts_hidden_from_public(self) -> None:
        draft = self.create_blog(self.alice, blog_slug="draft-post")
        self.create_blog(self.alice, blog_slug="live-post", blog_ispub=True)

        public = self.client.get(self.url("/blogs")).json()
        self.assertEqual([b["blog_slug"] for b in public], ["live-post"])
        self.assertEqual(self.client.get(self.url("/blogs/draft-post")).status_code, 404)
        self.assertEqual(self.client.get(self.url(f"/blogs/{draft['id']}")).status_code, 404)
        self.assertEqual(self.client.get(self.url("/blogs/live-post")).status_code, 200)
        self.assertEqual(
            self.client.get(self.url("/blogs"), params={"status": "all"}).status_code, 401
        )

        staff_all = self.alice.get(self.url("/blogs"), params={"status": "all"}).json()
        self.assertEqual(len(staff_all), 2)
        drafts = self.alice.get(self.url("/blogs"), params={"status": "draft"}).json()
        self.assertEqual([b["blog_slug"] for b in drafts], ["draft-post"])
        self.assertEqual(self.alice.get(self.url("/blogs/draft-post")).status_code, 200)

    def test_invalid_status_filter(self) -> None:
        resp = self.alice.get(self.url("/blogs"), params={"status": "archived"})
        self.assertEqual(resp.status_code, 400)

    def test_update_skips_empty_required_fields(self) -> None:
        created = self.create_blog(self.alice)
        resp = self.alice.patch(
            self.url(f"/blogs/{created['id']}"),
            json={"blog_title": "", "blog_ispub": True, "blog_tag": "health"},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["blog_title"], "Flu Season Tips")
        self.assertTrue(body["blog_ispub"])
        self.assertEqual(body["blog_tag"], "health")

    def test_update_with_nothing_to_change(self) -> None:
        created = self.create_blog(self.alice)
        resp = self.alice.patch(self.url(f"/blogs/{created['id']}"), json={"unknown": 1})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "No updates provided")

    def test_non_ascii_digit_is_treated_as_slug(self) -> None:
        self.assertEqual(self.client.get(self.url("/blogs/\u00b2")).status_code, 404)
        self.assertEqual(self.alice.get(self.url("/blogs/\u00b2")).status_code, 404)

    def test_out_of_range_id_is_not_found(self) -> None:
        huge = "99999999999999999999"
        self.assertEqual(self.alice.get(self.url(f"/blogs/{huge}")).status_code, 404)
        self.assertEqual(
            self.alice.patch(self.url(f"/blogs/{huge}"), json={"blog_tag": "x"}).status_code, 404
        )
        self.assertEqual(self.alice.delete(self.url(f"/blogs/{huge}")).status_code, 404)

    def test_missing_record(self) -> None:
        self.assertEqual(
            self.alice.patch(self.url("/blogs/9999"), json={"blog_tag": "x"}).status_code, 404
        )
        self.assertEqual(self.alice.delete(self.url("/blogs/9999")).status_code, 404)

    def test_delete(self) -> None:
        created = self.create_blog(self.alice)
        resp = self.alice.delete(self.url(f"/blogs/{created['id']}"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Blog post deleted successfully")
        self.assertEqual(self.alice.get(self.url(f"/blogs/{created['id']}")).status_code, 404)


class TestAnyAdminPolicy(ContentApiTestCase):
    """Default policy: any staff member may edit or delete any record."""

    def test_other_admin_may_edit_and_delete(self) -> None:
        created = self.create_blog(self.alice)
        resp = self.bob.patch(self.url(f"/blogs/{created['id']}"), json={"blog_tag": "bob"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.bob.delete(self.url(f"/blogs/{created['id']}")).status_code, 200)


class TestOwnerPolicy(ContentApiTestCase):
    """owner_or_superadmin: Admins may only modify their own records."""

    content_edit_policy = "owner_or_superadmin"

    def test_other_admin_forbidden(self) -> None:
        created = self.create_blog(self.alice)
        resp = self.bob.patch(self.url(f"/blogs/{created['id']}"), json={"blog_tag": "bob"})
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(self.bob.delete(self.url(f"/blogs/{created['id']}")).status_code, 403)

    def test_owner_and_superadmin_allowed(self) -> None:
        created = self.create_blog(self.alice)
        self.assertEqual(
            self.alice.patch(self.url(f"/blogs/{created['id']}"), json={"blog_tag": "a"}).status_code,
            200,
        )
        self.assertEqual(
            self.root.patch(self.url(f"/blogs/{created['id']}"), json={"blog_tag": "r"}).status_code,
            200,
        )
        self.assertEqual(self.root.delete(self.url(f"/blogs/{created['id']}")).status_code, 200)

    def test_policy_applies_to_news_and_events(self) -> None:
        news = self.alice.post(
            self.url("/news"), json={"news_title": "New Branch", "news_content": "Opening soon."}
        ).json()
        self.assertEqual(
            self.bob.patch(self.url(f"/news/{news['id']}"), json={"news_ispub": True}).status_code,
            403,
        )
        event = self.alice.post(
            self.url("/events"),
            json={"events_title": "Health Fair", "events_content": "Free checks."},
        ).json()
        self.assertEqual(self.bob.delete(self.url(f"/events/{event['id']}")).status_code, 403)


class TestEventsAndNews(ContentApiTestCase):
    def test_event_image_set_stored_as_json(self) -> None:
        resp = self.alice.post(
            self.url("/events"),
            json={
                "events_title": "Health Fair",
                "events_content": "Free checks.",
                "events_start": "2026-11-01",
                "events_imgset": ["a.jpg", "b.jpg"],
                "events_ispub": True,
            },
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(resp.json()["message"], "Event created successfully")
        event = self.client.get(self.url(f"/events/{resp.json()['slug']}")).json()
        self.assertEqual(json.loads(event["events_imgset"]), ["a.jpg", "b.jpg"])
        self.assertEqual(event["events_start"], "2026-11-01")

    def test_event_invalid_image_set(self) -> None:
        resp = self.alice.post(
            self.url("/events"),
            json={"events_title": "T", "events_content": "C", "events_imgset": "{not json"},
        )
        self.assertEqual(resp.status_code, 400)

    def test_news_lifecycle(self) -> None:
        created = self.alice.post(
            self.url("/news"), json={
                "news_title": "New Branch",
                "news_content": "Opening soon.",
                "news_ispub": False,
            },
        )
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["message"], "News article created successfully")
        news_id = created.json()["id"]
        self.assertEqual(self.client.get(self.url("/news")).json(), [])

        self.alice.patch(self.url(f"/news/{news_id}"), json={"news_ispub": True})
        public = self.client.get(self.url("/news")).json()
        self.assertEqual([n["news_id"] for n in public], [news_id])


    def test_events_and_news_default_to_published(self) -> None:
        self.alice.post(
            self.url("/events"), json={"events_title": "Fair", "events_content": "Checks."}
        )
        self.alice.post(self.url("/news"), json={"news_title": "Branch", "news_content": "Soon."})
        self.assertEqual(len(self.client.get(self.url("/events")).json()), 1)
        self.assertEqual(len(self.client.get(self.url("/news")).json()), 1)


class TestStatsAndHealth(ContentApiTestCase):
    def test_stats_counts_all_statuses(self) -> None:
        self.create_blog(self.alice, blog_slug="one")
        self.create_blog(self.alice, blog_slug="two", blog_ispub=True)
        resp = self.client.get(self.url("/stats"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"products": 0, "blogs": 2, "events": 0, "news": 0})

    def test_health(self) -> None:
        body = self.client.get(self.url("/health")).json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")
        self.assertEqual(body["products_database"], "connected")


if __name__ == "__main__":
    unittest.main()
