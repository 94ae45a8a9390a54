#!/usr/bin/env python
"""
BOM API smoke test against a running server.

Walks the demo scenario through the public API:
1. Create root part "Car"
2. Add "Engine" and "Wheel" below it, "Piston" below the engine
3. Count descendants and print the indented BOM
4. Copy the engine, then delete the car with its whole subtree

Usage:
    python manage.py init_system --name smoke   # prints the API key
    python smoke_bom_api.py <api-key> [base-url]
"""

import os
import sys

import requests

os.environ['NO_PROXY'] = '127.0.0.1,localhost'
os.environ['no_proxy'] = '127.0.0.1,localhost'

BASE_URL = sys.argv[2] if len(sys.argv) > 2 else 'http://127.0.0.1:8000/api/v1'


def check(response, expected_status, label):
    print(f"{label}: {response.status_code}")
    if response.status_code != expected_status:
        print(f"   ❌ expected {expected_status}: {response.text[:500]}")
        raise SystemExit(1)
    return response


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        raise SystemExit(2)

    session = requests.Session()
    session.headers['X-API-KEY'] = sys.argv[1]
    bom_url = f'{BASE_URL}/bom'

    # Requests without a key must be rejected
    response = requests.get(f'{bom_url}/', timeout=10)
    check(response, 401, 'NO_KEY')

    car_id = check(
        session.post(f'{bom_url}/', json={'name': 'Car', 'number': 'C-100'}, timeout=10),
        201, 'CREATE_CAR'
    ).json()['id']

    engine_id = check(
        session.post(f'{bom_url}/{car_id}/addsubpart/', json={'name': 'Engine', 'number': 'E-10'}, timeout=10),
        201, 'ADD_ENGINE'
    ).json()['id']
    check(
        session.post(f'{bom_url}/{car_id}/addsubpart/', json={'name': 'Wheel', 'number': 'W-20'}, timeout=10),
        201, 'ADD_WHEEL'
    )
    check(
        session.post(f'{bom_url}/{engine_id}/addsubpart/', json={'name': 'Piston', 'number': 'P-1'}, timeout=10),
        201, 'ADD_PISTON'
    )

    count = check(session.get(f'{bom_url}/{car_id}/count/', timeout=10), 200, 'COUNT').json()['count']
    print(f"   descendants of Car: {count}")
    if count != 3:
        print("   ❌ expected 3 descendants")
        raise SystemExit(1)

    bom = check(session.get(f'{bom_url}/{car_id}/showbom/', timeout=30), 200, 'SHOW_BOM').text
    print(bom)

    duplicate = check(session.post(f'{bom_url}/{engine_id}/copy/', timeout=10), 201, 'COPY_ENGINE').json()
    print(f"   copy id={duplicate['id']} parent={duplicate['parent_id']}")

    check(session.delete(f'{bom_url}/{car_id}/', timeout=30), 200, 'DELETE_CAR')
    check(session.get(f'{bom_url}/{engine_id}/', timeout=10), 404, 'ENGINE_GONE')

    print("\n=== SUCCESS! ===")


if __name__ == '__main__':
    main()
