# Module-level imports & constants
from locust import HttpUser, task, between
import os

# Origine autorisée par CORS_ORIGINS côté backend
ORIGIN = os.getenv("LOCUST_ORIGIN", "http://localhost:3000")
CUSTOMER_EMAIL = os.getenv("LOCUST_EMAIL", "load-test@example.com")


class WebsiteUser(HttpUser):
    wait_time = between(0.5, 2.0)

    def on_start(self):
        self.headers = {"Accept": "application/json", "Origin": ORIGIN}

    @task(5)
    def liveness(self):
        self.client.get("/healthz", name="GET /healthz", headers=self.headers)

    @task(2)
    def checkout(self):
        # Crée de vraies sessions Stripe: à lancer avec une clé sk_test_
        body = {
            "items": [{"title": "Almond Chrome", "price": 45, "quantity": 1}],
            "customer_email": CUSTOMER_EMAIL,
            "fulfillment": "in_person",
        }
        with self.client.post(
            "/create-checkout-session",
            json=body,
            headers=self.headers,
            name="POST /create-checkout-session",
            catch_response=True,
        ) as resp:
            # 429 attendu au-delà de 10 req/60s par IP
            if resp.status_code in (200, 429):
                resp.success()
            else:
                resp.failure(f"checkout failed ({resp.status_code}): {resp.text[:200]}")

    @task(1)
    def inquiry_validation(self):
        # Demande incomplète: exerce la validation sans envoyer d'email
        with self.client.post(
            "/experience-inquiry",
            json={"type": "event", "name": "Load", "email": CUSTOMER_EMAIL},
            headers=self.headers,
            name="POST /experience-inquiry (400)",
            catch_response=True,
        ) as resp:
            if resp.status_code in (400, 429):
                resp.success()
            else:
                resp.failure(f"unexpected status {resp.status_code}")
