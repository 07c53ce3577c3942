from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app, raise_server_exceptions=False)

print('ROOT:')
print(client.get('/').json())

print('\nHEALTH:')
print(client.get('/health').json())

print('\nDB HEALTH:')
resp = client.get('/health/db')
print(resp.status_code)
try:
    print(resp.json())
except ValueError:
    print(resp.text)

print('\nREPORTS:')
resp = client.get('/reports')
print(resp.status_code, resp.text[:500])
