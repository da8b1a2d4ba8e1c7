"""Unit tests for project routes."""

import unittest
from datetime import datetime, timezone

from fastapi.testclient import TestClient

from adapter.auth.mock_provider import MockAuthProvider
from adapter.memory.storage import InMemoryStorage
from api.dependencies import get_auth_provider, get_storage
from api.main import app
from domain.model.project import ProjectInputs
from domain.model.time_entry import TimeEntryFilter, TimeEntryInputs
from domain.model.user import ROLE_ADMIN, UserInputs


class ProjectRouteTestCase(unittest.TestCase):

    def setUp(self):
        """Set up test client with an admin as the default mock user."""
        self.client = TestClient(app)
        self.storage = InMemoryStorage()
        self.admin = self.storage.create_user(UserInputs(
            username='demo', password='x', name='Alex', email='alex@example.com', role=ROLE_ADMIN,
        ))
        self.member = self.storage.create_user(UserInputs(
            username='casey', password='x', name='Casey', email='casey@example.com',
        ))
        app.dependency_overrides[get_storage] = lambda: self.storage
        app.dependency_overrides[get_auth_provider] = lambda: MockAuthProvider()

    def tearDown(self):
        """Clean up dependency overrides."""
        app.dependency_overrides.clear()

    def _as_member(self) -> dict:
        return {'Authorization': 'Bearer casey'}


class TestReadProjects(ProjectRouteTestCase):

    def test_list_empty(self):
        response = self.client.get('/api/projects')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])

    def test_list_in_insertion_order(self):
        self.storage.create_project(ProjectInputs(name='First'))
        self.storage.create_project(ProjectInputs(name='Second'))

        response = self.client.get('/api/projects', headers=self._as_member())

        self.assertEqual([p['name'] for p in response.json()], ['First', 'Second'])

    def test_get_uses_camel_case(self):
        project = self.storage.create_project(ProjectInputs(name='Web', client='Acme'))

        response = self.client.get(f'/api/projects/{project.id}')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            'id': project.id,
            'name': 'Web',
            'description': None,
            'client': 'Acme',
            'color': '#0ea5e9',
            'isActive': True,
        })

    def test_get_missing_returns_404(self):
        response = self.client.get('/api/projects/99')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['detail'], 'Project not found')

    def test_non_numeric_id_returns_400(self):
        response = self.client.get('/api/projects/abc')

        self.assertEqual(response.status_code, 400)

    def test_unknown_token_returns_401(self):
        response = self.client.get('/api/projects', headers={'Authorization': 'Bearer ghost'})

        self.assertEqual(response.status_code, 401)


class TestWriteProjects(ProjectRouteTestCase):

    def test_create_returns_201_with_defaults(self):
        response = self.client.post('/api/projects', json={'name': 'Website Redesign'})

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['id'], 1)
        self.assertEqual(data['color'], '#0ea5e9')
        self.assertTrue(data['isActive'])
        self.assertEqual(self.storage.get_project(1).name, 'Website Redesign')

    def test_create_accepts_camel_case_fields(self):
        response = self.client.post('/api/projects', json={'name': 'Old', 'isActive': False, 'color': '#fff'})

        self.assertEqual(response.status_code, 201)
        self.assertFalse(self.storage.get_project(1).is_active)

    def test_create_without_name_returns_400(self):
        response = self.client.post('/api/projects', json={'client': 'Acme'})

        self.assertEqual(response.status_code, 400)
        data = response.json()
        self.assertEqual(data['detail'], 'Invalid project data')
        self.assertTrue(data['errors'])
        self.assertEqual(self.storage.get_all_projects(), [])

    def test_create_with_bad_color_returns_400(self):
        response = self.client.post('/api/projects', json={'name': 'Web', 'color': 'blue'})

        self.assertEqual(response.status_code, 400)

    def test_create_as_member_returns_403(self):
        response = self.client.post('/api/projects', json={'name': 'Web'}, headers=self._as_member())

        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.storage.get_all_projects(), [])

    def test_update_replaces_all_fields(self):
        project = self.storage.create_project(ProjectInputs(name='Web', client='Acme', color='#123456'))

        response = self.client.put(f'/api/projects/{project.id}', json={'name': 'Web v2'})

        self.assertEqual(response.status_code, 200)
        updated = self.storage.get_project(project.id)
        self.assertEqual(updated.name, 'Web v2')
        self.assertIsNone(updated.client)
        self.assertEqual(updated.color, '#0ea5e9')

    def test_update_missing_returns_404(self):
        response = self.client.put('/api/projects/99', json={'name': 'Web'})

        self.assertEqual(response.status_code, 404)

    def test_delete_cascades_to_time_entries(self):
        project = self.storage.create_project(ProjectInputs(name='Web'))
        other = self.storage.create_project(ProjectInputs(name='SEO'))
        date = datetime(2026, 3, 9, tzinfo=timezone.utc)
        for project_id in (project.id, project.id, other.id):
            self.storage.create_time_entry(TimeEntryInputs(
                project_id=project_id, user_id=self.admin.id, task='Work', date=date, duration=30,
            ))

        response = self.client.delete(f'/api/projects/{project.id}')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'success': True})
        remaining = self.storage.get_time_entries(TimeEntryFilter())
        self.assertEqual([e.project_id for e in remaining], [other.id])

    def test_second_delete_returns_404(self):
        project = self.storage.create_project(ProjectInputs(name='Web'))
        self.client.delete(f'/api/projects/{project.id}')

        response = self.client.delete(f'/api/projects/{project.id}')

        self.assertEqual(response.status_code, 404)

    def test_delete_as_member_returns_403(self):
        project = self.storage.create_project(ProjectInputs(name='Web'))

        response = self.client.delete(f'/api/projects/{project.id}', headers=self._as_member())

        self.assertEqual(response.status_code, 403)
        self.assertIsNotNone(self.storage.get_project(project.id))


if __name__ == '__main__':
    unittest.main()
