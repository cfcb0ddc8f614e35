import random
import time

from jsonsyslog_emitter.emitter import send


def main():
    # run `jsonsyslog listen --port 5514` first
    host, port = "127.0.0.1", 5514

    i = 0
    while True:
        i += 1
        send(
            service="demo-app-A",
            process="payments",
            action="payment_attempt",
            result=random.choice(["Success", "Error"]),
            message=f"trace_id=tr-{random.randint(1000, 9999)} amount={random.randint(5, 500)} GBP",
            category="Billing",
            host=host,
            port=port,
        )
        send(
            service="demo-app-B",
            process="auth",
            action="user_login",
            result=random.choice(["success", "deny"]),
            message=f"user={random.choice(['paul', 'sam', 'ada'])} i={i}",
            category="Security",
            host=host,
            port=port,
        )
        print(f"sent pair {i} -> {host}:{port}")
        time.sleep(1)


if __name__ == "__main__":
    main()
