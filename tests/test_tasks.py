import asyncio

from services.invitations.tasks import DropTask


def test_perform_while_running_is_dropped():
    async def scenario():
        release = asyncio.Event()
        calls = []

        async def work(n):
            calls.append(n)
            await release.wait()
            return n

        task = DropTask(work, name="work")
        first = task.perform(1)
        assert task.perform(2) is None
        assert task.is_running
        release.set()
        assert await first == 1
        assert not task.is_running
        second = task.perform(3)
        assert await second == 3
        return calls, task

    calls, task = asyncio.run(scenario())
    assert calls == [1, 3]
    assert task.performed == 2
    assert task.dropped == 1


def test_cancel_all_is_best_effort():
    async def scenario():
        fired = []

        async def timer():
            await asyncio.sleep(10)
            fired.append(True)

        task = DropTask(timer, name="timer")
        task.cancel_all()  # nothing running
        running = task.perform()
        await asyncio.sleep(0)
        task.cancel_all()
        assert not task.is_running
        await asyncio.gather(running, return_exceptions=True)
        assert running.cancelled()
        task.cancel_all()  # already cancelled
        return fired

    assert asyncio.run(scenario()) == []
