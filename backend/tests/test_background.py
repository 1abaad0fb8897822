import asyncio
import unittest

from formsync.services.background import BackgroundSyncRunner, run_with_background_sync


class RecordingSpawner:
    """Fake scheduler: keeps the sync factories, runs them only when told."""

    def __init__(self):
        self.factories = []

    def spawn(self, factory):
        self.factories.append(factory)

    async def run_all(self):
        return [await factory() for factory in self.factories]


class RunWithBackgroundSyncTests(unittest.IsolatedAsyncioTestCase):
    async def test_returns_primary_result_without_running_sync(self):
        spawner = RecordingSpawner()
        calls = []

        async def primary():
            calls.append("primary")
            return {"id": "1"}

        async def sync():
            calls.append("sync")
            return True

        result = await run_with_background_sync(primary, sync, spawner=spawner)

        self.assertEqual(result, {"id": "1"})
        self.assertEqual(calls, ["primary"])
        self.assertEqual(len(spawner.factories), 1)

        await spawner.run_all()
        self.assertEqual(calls, ["primary", "sync"])

    async def test_sync_failure_is_logged_not_raised(self):
        spawner = RecordingSpawner()

        async def primary():
            return "saved"

        async def sync():
            raise RuntimeError("sheets down")

        result = await run_with_background_sync(primary, sync, spawner=spawner)
        self.assertEqual(result, "saved")

        with self.assertLogs("formsync.services.background", level="ERROR") as logs:
            outcomes = await spawner.run_all()

        self.assertEqual(outcomes, [False])
        self.assertIn("Background Google Sheets sync failed", logs.output[0])

    async def test_primary_failure_propagates_and_skips_sync(self):
        spawner = RecordingSpawner()

        async def primary():
            raise ValueError("store failed")

        async def sync():
            return True

        with self.assertRaises(ValueError):
            await run_with_background_sync(primary, sync, spawner=spawner)
        self.assertEqual(spawner.factories, [])

    async def test_real_runner_does_not_wait_for_slow_sync(self):
        runner = BackgroundSyncRunner()
        release = asyncio.Event()
        finished = []

        async def primary():
            return 42

        async def slow_sync():
            await release.wait()
            finished.append(True)
            return True

        result = await asyncio.wait_for(
            run_with_background_sync(primary, slow_sync, spawner=runner), timeout=1
        )

        self.assertEqual(result, 42)
        self.assertEqual(runner.pending, 1)
        self.assertEqual(finished, [])

        release.set()
        await runner.drain()
        self.assertEqual(finished, [True])
        self.assertEqual(runner.pending, 0)

    async def test_real_runner_logs_rejected_sync(self):
        runner = BackgroundSyncRunner()

        async def primary():
            return "ok"

        async def failing_sync():
            raise ConnectionError("no network")

        with self.assertLogs("formsync.services.background", level="ERROR") as logs:
            result = await run_with_background_sync(primary, failing_sync, spawner=runner)
            await runner.drain()

        self.assertEqual(result, "ok")
        self.assertIn("no network", logs.output[0])


if __name__ == "__main__":
    unittest.main()
