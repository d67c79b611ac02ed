#!/usr/bin/env python3
"""
Validation script for the Shorty service.
Exercises a live running instance through its HTTP contract.
"""

import sys
import time
import requests
from typing import Optional
from datetime import datetime


class ServiceValidator:
    """Validates Shorty service functionality."""

    def __init__(self, base_url: str = "http://localhost:8080", timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.test_results = []

    def print_header(self, text: str):
        """Print a formatted header."""
        print(f"\n{'='*60}")
        print(f"  {text}")
        print(f"{'='*60}\n")

    def print_test(self, name: str, passed: bool, details: str = ""):
        """Print test result."""
        status = "PASS" if passed else "FAIL"
        self.test_results.append((name, passed))
        print(f"[{status}] {name}")
        if details:
            print(f"       {details}")

    def test_welcome(self) -> bool:
        """Test the welcome page at the root path."""
        try:
            response = self.session.get(f"{self.base_url}/", timeout=self.timeout)
            ok = response.status_code == 200 and "Welcome" in response.text
            self.print_test("Welcome Page", ok, f"Status: {response.status_code}")
            return ok
        except requests.RequestException as e:
            self.print_test("Welcome Page", False, f"Error: {e}")
            return False

    def test_create_short_url(self) -> Optional[str]:
        """Test creating a short URL with a generated key."""
        try:
            test_url = f"https://example.com/test/{int(time.time())}"
            response = self.session.post(
                f"{self.base_url}/shorty",
                json={"url": test_url},
                timeout=self.timeout
            )

            if response.status_code == 201:
                short_key = response.json().get("shortKey")
                if short_key:
                    self.print_test("Create Short URL", True, f"Key: {short_key}")
                    return short_key

            self.print_test("Create Short URL", False, f"Status: {response.status_code}")
            return None
        except (requests.RequestException, ValueError) as e:
            self.print_test("Create Short URL", False, f"Error: {e}")
            return None

    def test_custom_key(self) -> Optional[str]:
        """Test creating a short URL with a custom key."""
        custom_key = f"validate{int(time.time())}"
        try:
            response = self.session.post(
                f"{self.base_url}/shorty",
                json={"url": "https://example.com", "customKey": custom_key},
                timeout=self.timeout
            )

            ok = response.status_code == 201 and response.json().get("shortKey") == custom_key
            self.print_test("Custom Short Key", ok, f"Key: {custom_key}, Status: {response.status_code}")
            return custom_key if ok else None
        except (requests.RequestException, ValueError) as e:
            self.print_test("Custom Short Key", False, f"Error: {e}")
            return None

    def test_redirect(self, short_key: str, expected_url: Optional[str] = None) -> bool:
        """Test URL redirect functionality."""
        try:
            response = self.session.get(
                f"{self.base_url}/{short_key}",
                allow_redirects=False,
                timeout=self.timeout
            )

            location = response.headers.get("Location", "")
            ok = response.status_code == 302 and (expected_url is None or location == expected_url)
            self.print_test(
                "URL Redirect",
                ok,
                f"Redirects to: {location[:50]}" if location else "No Location header"
            )
            return ok
        except requests.RequestException as e:
            self.print_test("URL Redirect", False, f"Error: {e}")
            return False

    def test_missing_url_rejected(self) -> bool:
        """Test that a request without a URL is rejected."""
        try:
            response = self.session.post(
                f"{self.base_url}/shorty",
                json={"url": ""},
                timeout=self.timeout
            )

            ok = response.status_code == 400
            self.print_test("Missing URL Rejection", ok, f"Status: {response.status_code} (expected 400)")
            return ok
        except requests.RequestException as e:
            self.print_test("Missing URL Rejection", False, f"Error: {e}")
            return False

    def test_nonexistent_key(self) -> bool:
        """Test accessing a key that was never stored."""
        try:
            response = self.session.get(
                f"{self.base_url}/missing-{int(time.time())}",
                allow_redirects=False,
                timeout=self.timeout
            )

            ok = response.status_code == 404
            self.print_test("Non-existent Key", ok, f"Status: {response.status_code} (expected 404)")
            return ok
        except requests.RequestException as e:
            self.print_test("Non-existent Key", False, f"Error: {e}")
            return False

    def test_method_not_allowed(self) -> bool:
        """Test that GET on the create endpoint is refused."""
        try:
            response = self.session.get(f"{self.base_url}/shorty", timeout=self.timeout)

            ok = response.status_code == 405
            self.print_test("Method Not Allowed", ok, f"Status: {response.status_code} (expected 405)")
            return ok
        except requests.RequestException as e:
            self.print_test("Method Not Allowed", False, f"Error: {e}")
            return False

    def run_all_tests(self) -> bool:
        """Run all validation tests."""
        self.print_header("Shorty Service Validation")
        print(f"Testing service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")

        if not self.test_welcome():
            print("\nWelcome page failed. Service may not be running.")
            print(f"   Make sure the service is accessible at {self.base_url}")
            return False

        print()

        short_key = self.test_create_short_url()
        if short_key:
            self.test_redirect(short_key)

        custom_key = self.test_custom_key()
        if custom_key:
            self.test_redirect(custom_key, expected_url="https://example.com")

        print()

        self.test_missing_url_rejected()
        self.test_nonexistent_key()
        self.test_method_not_allowed()

        self.print_summary()

        return all(passed for _, passed in self.test_results)

    def print_summary(self):
        """Print test summary."""
        total = len(self.test_results)
        passed = sum(1 for _, p in self.test_results if p)
        failed = total - passed

        self.print_header("Test Summary")
        print(f"Total Tests:  {total}")
        print(f"Passed:       {passed}")
        print(f"Failed:       {failed}")
        print(f"Success Rate: {(passed/total*100):.1f}%")

        if failed > 0:
            print("\nFailed tests:")
            for name, passed in self.test_results:
                if not passed:
                    print(f"   - {name}")

        print()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Validate Shorty service functionality"
    )
    parser.add_argument(
        "--url",
        default="http://localhost:8080",
        help="Base URL of the service (default: http://localhost:8080)"
    )

    args = parser.parse_args()

    validator = ServiceValidator(args.url)

    try:
        success = validator.run_all_tests()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\nValidation interrupted by user")
        sys.exit(2)


if __name__ == "__main__":
    main()
