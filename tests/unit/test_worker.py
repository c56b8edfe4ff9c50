from unittest.mock import MagicMock, patch

from docworker.queue.models import Job
from docworker.worker.worker import Worker


def _make_worker(reconnect: MagicMock | None = None) -> tuple[Worker, MagicMock, MagicMock]:
    """Create a Worker with mocked dependencies."""
    mock_queue = MagicMock()
    mock_runner = MagicMock()
    settings = MagicMock(job_poll_interval_seconds=1, worker_error_backoff_seconds=3)
    worker = Worker(mock_queue, mock_runner, settings, reconnect=reconnect)
    return worker, mock_queue, mock_runner


def _make_job(document_id: str = "doc-1") -> Job:
    return Job(document_id=document_id, owner_id="owner-1")


class TestWorkerDispatch:
    def test_dispatches_job_to_runner(self) -> None:
        worker, _queue, mock_runner = _make_worker()
        job = _make_job()

        with patch.object(worker, "_try_dequeue", side_effect=[job, KeyboardInterrupt]):
            worker.run()

        mock_runner.run.assert_called_once_with(job)

    def test_dispatches_multiple_jobs(self) -> None:
        worker, _queue, mock_runner = _make_worker()

        with patch.object(
            worker,
            "_try_dequeue",
            side_effect=[_make_job("a"), _make_job("b"), KeyboardInterrupt],
        ):
            worker.run()

        assert mock_runner.run.call_count == 2

    def test_stops_after_max_jobs(self) -> None:
        worker, mock_queue, mock_runner = _make_worker()
        mock_queue.dequeue.side_effect = [_make_job("a"), _make_job("b"), _make_job("c")]

        worker.run(max_jobs=2)

        assert mock_runner.run.call_count == 2

    def test_run_once_dequeues_from_queue(self) -> None:
        worker, mock_queue, mock_runner = _make_worker()
        job = _make_job()
        mock_queue.dequeue.return_value = job

        assert worker.run_once() is True
        mock_runner.run.assert_called_once_with(job)


class TestWorkerSleep:
    def test_sleeps_when_no_job(self) -> None:
        worker, _queue, _runner = _make_worker()

        with (
            patch.object(worker, "_try_dequeue", side_effect=[None, KeyboardInterrupt]),
            patch("docworker.worker.worker.time.sleep") as mock_sleep,
        ):
            worker.run()

        mock_sleep.assert_called_once_with(1)


class TestWorkerRecovery:
    def test_backs_off_and_reconnects_after_error(self) -> None:
        reconnect = MagicMock()
        worker, _queue, mock_runner = _make_worker(reconnect=reconnect)

        with (
            patch.object(
                worker,
                "_try_dequeue",
                side_effect=[ConnectionError("connection reset"), _make_job(), KeyboardInterrupt],
            ),
            patch("docworker.worker.worker.time.sleep") as mock_sleep,
        ):
            worker.run()

        mock_sleep.assert_called_once_with(3)
        reconnect.assert_called_once()
        mock_runner.run.assert_called_once()

    def test_reconnect_failure_does_not_stop_loop(self) -> None:
        reconnect = MagicMock(side_effect=ConnectionError("still down"))
        worker, _queue, _runner = _make_worker(reconnect=reconnect)

        with (
            patch.object(
                worker,
                "_try_dequeue",
                side_effect=[ConnectionError("down"), ConnectionError("down"), KeyboardInterrupt],
            ),
            patch("docworker.worker.worker.time.sleep"),
        ):
            worker.run()

        assert reconnect.call_count == 2

    def test_runner_error_is_contained(self) -> None:
        worker, _queue, mock_runner = _make_worker()
        mock_runner.run.side_effect = RuntimeError("queue write failed")

        with (
            patch.object(worker, "_try_dequeue", return_value=_make_job()),
            patch("docworker.worker.worker.time.sleep"),
        ):
            assert worker.run_once() is False

    def test_releases_the_leased_job_after_reconnecting(self) -> None:
        reconnect = MagicMock()
        worker, _queue, mock_runner = _make_worker(reconnect=reconnect)
        job = _make_job()
        order = MagicMock()
        order.attach_mock(reconnect, "reconnect")
        order.attach_mock(mock_runner.release, "release")
        mock_runner.run.side_effect = ConnectionError("database went away")

        with (
            patch.object(worker, "_try_dequeue", return_value=job),
            patch("docworker.worker.worker.time.sleep"),
        ):
            assert worker.run_once() is False

        mock_runner.release.assert_called_once_with(job, "database went away")
        assert [c[0] for c in order.mock_calls] == ["reconnect", "release"]

    def test_release_uses_exception_name_when_message_empty(self) -> None:
        worker, _queue, mock_runner = _make_worker()
        job = _make_job()
        mock_runner.run.side_effect = TimeoutError()

        with (
            patch.object(worker, "_try_dequeue", return_value=job),
            patch("docworker.worker.worker.time.sleep"),
        ):
            worker.run_once()

        mock_runner.release.assert_called_once_with(job, "TimeoutError")

    def test_no_release_when_dequeue_itself_failed(self) -> None:
        worker, _queue, mock_runner = _make_worker()

        with (
            patch.object(worker, "_try_dequeue", side_effect=ConnectionError("down")),
            patch("docworker.worker.worker.time.sleep"),
        ):
            worker.run_once()

        mock_runner.release.assert_not_called()

    def test_release_failure_does_not_stop_loop(self) -> None:
        worker, _queue, mock_runner = _make_worker()
        mock_runner.run.side_effect = [ConnectionError("down"), None]
        mock_runner.release.side_effect = ConnectionError("still down")

        with (
            patch.object(
                worker, "_try_dequeue", side_effect=[_make_job("a"), _make_job("b"), KeyboardInterrupt]
            ),
            patch("docworker.worker.worker.time.sleep"),
        ):
            worker.run()

        assert mock_runner.run.call_count == 2


class TestWorkerShutdown:
    def test_handles_keyboard_interrupt(self) -> None:
        worker, _queue, _runner = _make_worker()

        with patch.object(worker, "_try_dequeue", side_effect=KeyboardInterrupt):
            worker.run()  # Should not raise
