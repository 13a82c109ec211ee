import unittest

from whatsup.checks.results import CheckResult, CheckSummary
from whatsup.formatting import summarize


def _up(endpoint: str) -> CheckResult:
    return CheckResult(endpoint=endpoint, up=True)


def _down(endpoint: str, cause: str = "unreachable") -> CheckResult:
    return CheckResult(endpoint=endpoint, up=False, cause=cause)


class SummarizeTests(unittest.TestCase):
    def test_all_up(self) -> None:
        summary = summarize([_up("a.test"), _up("b.test"), _up("c.test")])

        self.assertTrue(summary.all_up)
        self.assertEqual(summary.message, "All 3 endpoints are up.")

    def test_all_up_names_probe_method(self) -> None:
        self.assertEqual(
            summarize([_up("a.test")], probe_kind="https").message,
            "All 1 endpoints are up. Checked using HTTPS GET.",
        )
        self.assertEqual(
            summarize([_up("a.test")], probe_kind="ping").message,
            "All 1 endpoints are up. Checked using ping.",
        )

    def test_empty_results(self) -> None:
        summary = summarize([])

        self.assertTrue(summary.all_up)
        self.assertIn("0", summary.message)

    def test_down_lists_only_down_endpoints(self) -> None:
        results = [
            _up("up-1.test"),
            _down("down-1.test"),
            _up("up-2.test"),
            _down("down-2.test"),
            _down("down-3.test"),
        ]

        summary = summarize(results)

        self.assertFalse(summary.all_up)
        self.assertTrue(summary.message.startswith("**3 endpoints are down!**"))
        self.assertEqual(summary.message.count("Endpoint: "), 3)
        self.assertEqual(summary.message.count(" | Error: "), 3)
        self.assertNotIn("up-1.test", summary.message)
        self.assertNotIn("up-2.test", summary.message)

    def test_down_message_format(self) -> None:
        summary = summarize([_up("a.test"), _down("b.test", "boom")])

        self.assertEqual(
            summary,
            CheckSummary(
                all_up=False,
                message="**1 endpoints are down!**\n\n\n\nEndpoint: b.test | Error: boom \n\n",
            ),
        )

    def test_down_order_follows_input_unless_sorted(self) -> None:
        results = [_down("z.test"), _down("a.test"), _down("m.test")]

        received = summarize(results).message
        self.assertLess(received.index("z.test"), received.index("a.test"))

        ordered = summarize(results, sort_down=True).message
        self.assertLess(ordered.index("a.test"), ordered.index("m.test"))
        self.assertLess(ordered.index("m.test"), ordered.index("z.test"))


if __name__ == "__main__":
    unittest.main()
