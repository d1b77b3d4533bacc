from __future__ import annotations

from eventual import Deferred, EventualConfig, configure, get, invoke, join, observe


class Account:
    def __init__(self) -> None:
        self.balance = 100

    def deposit(self, amount: int) -> int:
        self.balance += amount
        return self.balance


def run_simple(config: EventualConfig) -> list[str]:
    env = configure(config)
    lines: list[str] = []

    # Operations sent before the account exists are queued and replayed in order.
    account = Deferred()
    balance = get(account.ref, "balance")
    deposit = invoke(account.ref, "deposit", 25)

    total = join(balance, deposit, combine=lambda before, after: f"{before} -> {after}")
    observe(total, lines.append, lambda reason: lines.append(f"failed: {reason}"))

    account.resolve(Account())
    env.scheduler.run()
    return lines


if __name__ == "__main__":
    for line in run_simple(EventualConfig(scheduler="queue")):
        print(line)
