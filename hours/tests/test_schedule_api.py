import tempfile
import unittest
from fastapi.testclient import TestClient
from hours.api.api_run import app
from hours.api.dependencies import get_checker, get_repository
from hours.domain.ConflictReport import ConflictReport
from hours.infra.Schedule_Repository import ScheduleRepository

RESTAURANT = "resto-1"

LEGACY_DOCUMENT = {
    "openingHours": {
        "Lunes": "Cerrado",
        "Martes": "13:00-16:00,20:00-23:30",
        "Miércoles": "13:00-16:00,20:00-23:30",
        "Jueves": "13:00-16:00,20:00-23:30",
        "Viernes": "13:00-16:00,20:00-23:30",
        "Sábado": "13:00-16:00,20:00-23:30",
        "Domingo": "13:00-16:00",
    },
}


class FixedChecker:
    def __init__(self):
        self.report = ConflictReport.none()

    async def check_conflicts(self, restaurant_id, schedule):
        return self.report


class TestScheduleAPI(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.repo = ScheduleRepository(self.tmp.name)
        self.checker = FixedChecker()
        app.dependency_overrides[get_repository] = lambda: self.repo
        app.dependency_overrides[get_checker] = lambda: self.checker
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        self.tmp.cleanup()

    def put_legacy(self):
        resp = self.client.put(f'/api/hours/{RESTAURANT}', json=LEGACY_DOCUMENT)
        self.assertEqual(resp.status_code, 200)
        return resp.json()

    def test_unconfigured_restaurant_is_closed(self):
        resp = self.client.get(f'/api/hours/{RESTAURANT}')
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['preview'], "⚠️ The restaurant is closed every day")
        self.assertFalse(data['openingHours']['Lunes']['enabled'])
        self.assertEqual(data['specialDays'], [])

    def test_put_upgrades_legacy_document(self):
        data = self.put_legacy()
        self.assertTrue(data['saved'])
        self.assertEqual(data['preview'], "🟢 Open Tuesday, Wednesday, Thursday, Friday, Saturday and Sunday"
                                          " • 🔴 Closed Monday")
        stored = self.client.get(f'/api/hours/{RESTAURANT}').json()
        tuesday = stored['openingHours']['Martes']
        self.assertEqual([s['name'] for s in tuesday['shifts']], ["Lunch", "Dinner"])
        self.assertEqual(tuesday['shifts'][0]['id'], "Martes-0")

    def test_put_rejects_malformed_document(self):
        resp = self.client.put(f'/api/hours/{RESTAURANT}', json={"openingHours": {"Lunes": "9-5"}})
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(self.repo.exists(RESTAURANT))

    def test_put_held_back_by_conflicts_unless_forced(self):
        self.checker.report = ConflictReport(True, "Found 1 reservation(s) that would conflict", ("x",))
        resp = self.client.put(f'/api/hours/{RESTAURANT}', json=LEGACY_DOCUMENT)
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()['saved'])
        self.assertTrue(resp.json()['hasConflicts'])
        self.assertFalse(self.repo.exists(RESTAURANT))

        resp = self.client.put(f'/api/hours/{RESTAURANT}?force=true', json=LEGACY_DOCUMENT)
        self.assertTrue(resp.json()['saved'])
        self.assertTrue(self.repo.exists(RESTAURANT))

    def test_resolve_and_upcoming(self):
        self.put_legacy()
        resp = self.client.post(f'/api/hours/{RESTAURANT}/special-days',
                                json={"date": "2025-12-24", "name": "Nochebuena", "type": "event",
                                      "hours": "19:00-23:59"})
        self.assertEqual(resp.status_code, 200)

        day = self.client.get(f'/api/hours/{RESTAURANT}/resolve', params={"date": "2025-12-24"}).json()
        self.assertEqual(day['weekday'], "Miércoles")
        self.assertTrue(day['isOpen'])
        self.assertEqual([s['name'] for s in day['shifts']], ["Lunch"])
        self.assertEqual(day['reason']['name'], "Nochebuena")

        upcoming = self.client.get(f'/api/hours/{RESTAURANT}/upcoming',
                                   params={"start": "2025-12-22", "days": 3}).json()
        self.assertEqual([d['isOpen'] for d in upcoming['days']], [False, True, True])

    def test_upcoming_range_is_limited(self):
        resp = self.client.get(f'/api/hours/{RESTAURANT}/upcoming', params={"days": 0})
        self.assertEqual(resp.status_code, 422)

    def test_special_day_conflict_flow(self):
        url = f'/api/hours/{RESTAURANT}/special-days'
        first = self.client.post(url, json={"date": "2025-12-25", "name": "Navidad"})
        self.assertEqual(first.json()['status'], "ok")

        clash = {"date": "2025-12-25", "name": "Cena", "type": "event", "hours": "20:00-23:00"}
        resp = self.client.post(url, json=clash)
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()['existing']['name'], "Navidad")

        resp = self.client.post(url, json={**clash, "on_conflict": "abort"})
        self.assertEqual(resp.json()['status'], "aborted")

        resp = self.client.post(url, json={**clash, "on_conflict": "replace"})
        self.assertEqual([sd['name'] for sd in resp.json()['specialDays']], ["Cena"])

        listed = self.client.get(url, params={"today": "2025-12-01"}).json()
        self.assertEqual([sd['name'] for sd in listed['upcoming']], ["Cena"])
        self.assertEqual(listed['past'], [])

        sd_id = listed['upcoming'][0]['id']
        self.assertEqual(self.client.delete(f'{url}/{sd_id}').status_code, 200)
        self.assertEqual(self.client.delete(f'{url}/{sd_id}').status_code, 404)

    def test_custom_template_patch_and_delete(self):
        document = {"openingHours": {"Sábado": {"enabled": True, "shifts": [
            {"id": "a", "name": "Brunch", "emoji": "🥐", "startTime": "10:00", "endTime": "13:00", "isCustom": True},
        ]}, "Domingo": {"enabled": True, "shifts": [
            {"id": "b", "name": "Brunch", "emoji": "🥐", "startTime": "11:00", "endTime": "14:00", "isCustom": True},
            {"id": "c", "name": "Vermut", "emoji": "🍷", "startTime": "18:00", "endTime": "20:00", "isCustom": True},
        ]}}}
        self.assertTrue(self.client.put(f'/api/hours/{RESTAURANT}', json=document).json()['saved'])
        url = f'/api/hours/{RESTAURANT}/templates'

        listed = self.client.get(url).json()
        self.assertEqual(listed['count'], 2)
        self.assertEqual(listed['templates'][0]['usedOn'], ["Sábado", "Domingo"])

        resp = self.client.patch(f'{url}/Brunch', json={"name": "Vermut", "on_collision": "reject"})
        self.assertEqual(resp.status_code, 409)
        resp = self.client.patch(f'{url}/Brunch', json={"name": "Late breakfast", "color": "#ec4899"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.patch(f'{url}/Brunch', json={"name": "X"}).status_code, 404)

        resp = self.client.delete(f'{url}/Late breakfast')
        self.assertEqual(resp.status_code, 200)
        stored = self.client.get(f'/api/hours/{RESTAURANT}').json()['openingHours']
        self.assertFalse(stored['Sábado']['enabled'])
        self.assertEqual([s['name'] for s in stored['Domingo']['shifts']], ["Vermut"])

    def test_bulk_endpoints(self):
        self.put_legacy()
        resp = self.client.post(f'/api/hours/{RESTAURANT}/days/Martes/apply-to-all')
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(all(day['enabled'] for day in resp.json()['openingHours'].values()))

        resp = self.client.post(f'/api/hours/{RESTAURANT}/venue-hours',
                                json={"openTime": "12:00", "closeTime": "00:00"})
        self.assertEqual(resp.json()['openingHours']['Lunes']['closeTime'], "00:00")

        preview = self.client.get(f'/api/hours/{RESTAURANT}/preview', params={"language": "es"}).json()
        self.assertEqual(preview['preview'], "🟢 Abierto todos los días de 13:00 a 16:00 y 20:00 a 23:30")

        self.assertEqual(self.client.post(f'/api/hours/{RESTAURANT}/days/Someday/apply-to-all').status_code, 400)

    def test_corrupt_stored_document_is_server_error(self):
        with open(f'{self.tmp.name}/{RESTAURANT}.json', 'w', encoding='utf-8') as f:
            f.write('{"openingHours": {"Lunes": 42}}')
        self.assertEqual(self.client.get(f'/api/hours/{RESTAURANT}').status_code, 500)

    def test_stored_document_with_bad_bytes_is_server_error(self):
        with open(f'{self.tmp.name}/{RESTAURANT}.json', 'wb') as f:
            f.write(b'{"openingHours": {"Lunes": "\xff\xfe"}}')
        self.assertEqual(self.client.get(f'/api/hours/{RESTAURANT}').status_code, 500)


if __name__ == '__main__':
    unittest.main()
