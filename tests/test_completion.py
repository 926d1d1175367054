import asyncio
import gc
import io
import json
import unittest
from contextlib import redirect_stderr

import anyio

from optionalpy import Optional, ConsoleLogger, of_completion, settle


async def boom():
    raise ValueError("boom")


async def five():
    await asyncio.sleep(0)
    return 5


class TestOfCompletion(unittest.IsolatedAsyncioTestCase):
    async def test_success_wraps_value(self):
        opt = await Optional.of_completion(five())
        self.assertTrue(opt.is_present())
        self.assertEqual(opt.get(), 5)

    async def test_failure_settles_empty(self):
        opt = await Optional.of_completion(boom())
        self.assertFalse(opt.is_present())

    async def test_future_source(self):
        fut = asyncio.get_running_loop().create_future()
        out = of_completion(fut)
        await asyncio.sleep(0)
        self.assertFalse(out.done())
        fut.set_result(None)
        opt = await out
        self.assertTrue(opt.is_present())
        self.assertIsNone(opt.get())

    async def test_failed_future_settles_empty(self):
        fut = asyncio.get_running_loop().create_future()
        out = of_completion(fut)
        fut.set_exception(RuntimeError("x"))
        self.assertTrue((await out).is_empty())

    async def test_cancelled_source_settles_empty(self):
        task = asyncio.create_task(asyncio.sleep(10))
        out = of_completion(task)
        await asyncio.sleep(0)
        task.cancel()
        self.assertTrue((await out).is_empty())

    async def test_cancelling_output_leaves_source_running(self):
        fut = asyncio.get_running_loop().create_future()
        out = of_completion(fut)
        out.cancel()
        fut.set_result(1)
        await asyncio.sleep(0)
        self.assertFalse(fut.cancelled())
        self.assertTrue(out.cancelled())

    async def test_failure_after_output_cancelled_is_still_swallowed(self):
        loop = asyncio.get_running_loop()
        reported = []
        loop.set_exception_handler(lambda _loop, ctx: reported.append(ctx.get("message")))
        try:
            out = of_completion(boom())
            out.cancel()
            await asyncio.sleep(0.05)
            gc.collect()
        finally:
            loop.set_exception_handler(None)
        self.assertTrue(out.cancelled())
        self.assertEqual(reported, [])

    async def test_static_entry_point_accepts_logger(self):
        logger = ConsoleLogger(level="DEBUG")
        buf = io.StringIO()
        with redirect_stderr(buf):
            opt = await Optional.of_completion(boom(), logger=logger)
        self.assertTrue(opt.is_empty())
        self.assertIn("DEBUG: completion failed, settling empty", buf.getvalue())

    async def test_failure_logged_at_debug(self):
        logger = ConsoleLogger(level="DEBUG", json_output=True)
        buf = io.StringIO()
        with redirect_stderr(buf):
            opt = await of_completion(boom(), logger=logger)
        self.assertTrue(opt.is_empty())
        rec = json.loads(buf.getvalue().strip().splitlines()[0])
        self.assertEqual(rec["level"], "DEBUG")
        self.assertIn("failed", rec["msg"])
        self.assertIn("ValueError", rec["fields"]["error"])

    async def test_failure_silent_by_default(self):
        buf = io.StringIO()
        with redirect_stderr(buf):
            opt = await of_completion(boom(), logger=ConsoleLogger())
        self.assertTrue(opt.is_empty())
        self.assertEqual(buf.getvalue(), "")


class TestSettle(unittest.IsolatedAsyncioTestCase):
    async def test_settle_success_and_failure(self):
        self.assertEqual((await settle(five())).get(), 5)
        self.assertTrue((await settle(boom())).is_empty())

    async def test_settle_reraises_cancellation(self):
        task = asyncio.create_task(settle(asyncio.sleep(10)))
        await asyncio.sleep(0)
        task.cancel()
        with self.assertRaises(asyncio.CancelledError):
            await task


class TestSettleAnyIO(unittest.TestCase):
    def test_settle_under_anyio(self):
        async def main():
            async def value():
                await anyio.sleep(0)
                return "ok"
            async def fail():
                await anyio.sleep(0)
                raise KeyError("k")
            return await settle(value()), await settle(fail())

        ok, missing = anyio.run(main)
        self.assertEqual(ok.get(), "ok")
        self.assertTrue(missing.is_empty())
