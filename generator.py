import argparse
import random
import time
import logging
from typing import List, Dict, Optional

import requests
from faker import Faker

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

ACTIVITIES = [
    ('running', 'km', (10, 100)),
    ('cycling', 'km', (50, 500)),
    ('swimming', 'laps', (40, 400)),
    ('walking', 'steps', (50000, 300000)),
    ('push-ups', 'reps', (200, 2000)),
    ('yoga', 'minutes', (300, 1500)),
    ('rowing', 'meters', (10000, 100000)),
    ('squats', 'reps', (200, 2000)),
]


class DemoDataGenerator:
    def __init__(self, base_url: str = "http://127.0.0.1:8080/api"):
        self.base_url = base_url.rstrip('/')
        self.fake = Faker()
        self.session = requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})

        self.created_users = []
        self.created_goals = []
        self.created_entries = []

    def make_request(self, method, endpoint, data=None, token=None):
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        headers = {'Authorization': f'Token {token}'} if token else {}

        try:
            if method.upper() == 'GET':
                response = self.session.get(url, params=data, headers=headers)
            elif method.upper() == 'POST':
                response = self.session.post(url, json=data, headers=headers)
            else:
                raise ValueError(f"Unsupported method: {method}")

            response.raise_for_status()

            if response.status_code != 204 and response.content:
                return response.json()
            return None

        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {method} {url} - {e}")
            if hasattr(e, 'response') and e.response is not None:
                logger.error(f"Response: {e.response.text}")
            return None

    def generate_users(self, count=10) -> List[Dict]:
        logger.info(f"Generating {count} users...")

        used_emails = set()
        max_attempts = count * 3
        attempts = 0

        while len(self.created_users) < count and attempts < max_attempts:
            attempts += 1

            email = f"{self.fake.user_name()}{random.randint(1000, 9999)}@example.com"
            if email in used_emails:
                continue
            used_emails.add(email)

            password = self.fake.password(length=12)
            user = self.make_request('POST', 'users/', {
                "email": email,
                "username": self.fake.first_name(),
                "password": password,
                "confirm_password": password
            })
            if user is None:
                continue

            login = self.make_request('POST', 'users/login/', {"email": email, "password": password})
            if login is None:
                logger.error(f"Could not log in as {email}")
                continue

            self.created_users.append({'id': user['id'], 'email': email, 'token': login['token']})

        if len(self.created_users) < count:
            logger.warning(f"Gave up after {attempts} attempts, only {len(self.created_users)} of {count} users created")

        logger.info(f"Generated {len(self.created_users)} users")
        return self.created_users

    def generate_goals(self, per_user=3) -> List[Dict]:
        if not self.created_users:
            raise ValueError("Need users first")

        logger.info(f"Generating up to {per_user} goals per user...")

        for user in self.created_users:
            for activity, unit, (low, high) in random.sample(ACTIVITIES, min(per_user, len(ACTIVITIES))):
                goal = self.make_request('POST', 'goals/', {
                    "activity": activity,
                    "unit": unit,
                    "target_value": random.randint(low, high),
                    "deadline_days": random.choice([7, 14, 30, 60, 90]),
                    "source": random.choice(["manual", "ai"])
                }, token=user['token'])

                if goal is not None:
                    self.created_goals.append({'id': goal['id'], 'token': user['token'],
                                               'target_value': float(goal['target_value'])})

        logger.info(f"Generated {len(self.created_goals)} goals")
        return self.created_goals

    def generate_progress(self, max_entries_per_goal=5) -> List[Dict]:
        if not self.created_goals:
            raise ValueError("Need goals first")

        logger.info(f"Logging up to {max_entries_per_goal} entries per goal...")

        completed = 0
        for goal in self.created_goals:
            for _ in range(random.randint(0, max_entries_per_goal)):
                value = round(random.uniform(0.05, 0.4) * goal['target_value'], 2)
                result = self.make_request('POST', f"goals/{goal['id']}/progress/",
                                           {"value": value}, token=goal['token'])
                if result is None:
                    continue

                self.created_entries.append(result['entry'])
                if result['goal_completed']:
                    completed += 1

                time.sleep(0.05)

        logger.info(f"Logged {len(self.created_entries)} entries, {completed} goals completed")
        return self.created_entries

    def generate_all_data(self, users=10, goals_per_user=3, entries_per_goal=5):
        logger.info("Starting demo data generation...")
        logger.info(f"Using base URL: {self.base_url}")

        start_time = time.time()

        self.generate_users(users)

        self.generate_goals(goals_per_user)

        self.generate_progress(entries_per_goal)

        elapsed_time = time.time() - start_time
        logger.info(f"Demo data generation completed in {elapsed_time:.2f} seconds")


def test_connection(base_url) -> Optional[bool]:
    print(f"Testing connection to {base_url}...")

    url = f"{base_url.rstrip('/')}/users/login/"
    try:
        response = requests.post(url, json={}, timeout=5)
    except requests.exceptions.ConnectionError:
        print("users/login/: Connection failed")
        return False

    print(f"users/login/: Server is responding (status {response.status_code})")
    return True


def main():
    parser = argparse.ArgumentParser(description='Fill a running SuperHit API with demo data')
    parser.add_argument('--base-url', default='http://127.0.0.1:8080/api')
    parser.add_argument('--users', type=int, default=10)
    parser.add_argument('--goals-per-user', type=int, default=3)
    parser.add_argument('--entries-per-goal', type=int, default=5)
    args = parser.parse_args()

    if not test_connection(args.base_url):
        print("\nCannot connect to server.")
        print("Please make sure:")
        print("1. Django server is running: python manage.py runserver 8080")
        print("2. Server is accessible at the given --base-url")
        return

    generator = DemoDataGenerator(base_url=args.base_url)

    try:
        generator.generate_all_data(args.users, args.goals_per_user, args.entries_per_goal)
        print("\n" + "=" * 60)
        print("FINAL SUMMARY:")
        print("=" * 60)
        print(f"Users created: {len(generator.created_users)}")
        print(f"Goals created: {len(generator.created_goals)}")
        print(f"Progress entries logged: {len(generator.created_entries)}")
        print("=" * 60)

    except KeyboardInterrupt:
        print("\nData generation interrupted by user")


if __name__ == "__main__":
    main()
