#!/usr/bin/env python3
"""
Validation script for the short links service.
Tests the live running service to ensure all functionality works correctly.
"""

import sys
import time
import requests
from typing import Optional
from datetime import datetime


class ServiceValidator:
    """Validates short links service functionality."""

    def __init__(self, base_url: str = "http://localhost:9200"):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.test_results = []
        self.run_tag = str(int(time.time()))

    def print_header(self, text: str):
        """Print a formatted header."""
        print(f"\n{'='*60}")
        print(f"  {text}")
        print(f"{'='*60}\n")

    def print_test(self, name: str, passed: bool, details: str = ""):
        """Print test result."""
        status = "✅ PASS" if passed else "❌ FAIL"
        self.test_results.append((name, passed))
        print(f"{status} - {name}")
        if details:
            print(f"       {details}")

    def expect_status(self, name: str, response: requests.Response, expected: int) -> bool:
        passed = response.status_code == expected
        self.print_test(name, passed, f"Status: {response.status_code} (expected {expected})")
        return passed

    def test_health_check(self) -> bool:
        """Test health check endpoint."""
        try:
            response = self.session.get(f"{self.base_url}/api/health", timeout=5)
            if response.status_code == 200:
                data = response.json()
                is_healthy = (
                    data.get("status") == "healthy" and
                    data.get("database") == "healthy"
                )
                details = f"DB: {data.get('database')}, Cache: {data.get('cache', 'N/A')}"
                self.print_test("Health Check", is_healthy, details)
                return is_healthy
            else:
                self.print_test("Health Check", False, f"Status: {response.status_code}")
                return False
        except requests.RequestException as e:
            self.print_test("Health Check", False, f"Error: {str(e)}")
            return False

    def test_create_link(self, alias: Optional[str] = None) -> Optional[dict]:
        """Test creating a link."""
        name = "Create Link" + (" With Alias" if alias else "")
        try:
            response = self.session.post(
                f"{self.base_url}/api/links",
                json={"url": f"https://example.com/test/{self.run_tag}", "alias": alias},
                timeout=5
            )

            if response.status_code == 201:
                data = response.json()
                self.print_test(name, True, f"ID: {data['id']}, URL: {data.get('short_url')}")
                return data

            self.print_test(name, False, f"Status: {response.status_code}")
            return None
        except requests.RequestException as e:
            self.print_test(name, False, f"Error: {str(e)}")
            return None

    def test_register_file(self) -> Optional[dict]:
        """Test registering a file asset."""
        try:
            response = self.session.post(
                f"{self.base_url}/api/files",
                json={
                    "blob_location": f"https://blobs.example.com/uploads/{self.run_tag}_check.txt",
                    "file_name": "check.txt",
                    "size_bytes": 12,
                    "mime_type": "text/plain",
                },
                timeout=5
            )

            if response.status_code == 201:
                data = response.json()
                self.print_test("Register File", True, f"ID: {data['id']}")
                return data

            self.print_test("Register File", False, f"Status: {response.status_code}")
            return None
        except requests.RequestException as e:
            self.print_test("Register File", False, f"Error: {str(e)}")
            return None

    def test_redirect(self, identifier: str, name: str = "Redirect") -> bool:
        """Test redirect functionality."""
        try:
            response = self.session.get(
                f"{self.base_url}/{identifier}",
                allow_redirects=False,
                timeout=5
            )

            is_redirect = response.status_code == 302
            location = response.headers.get("Location", "")
            self.print_test(
                name,
                is_redirect,
                f"Redirects to: {location[:50]}..." if location else "No Location header"
            )
            return is_redirect
        except requests.RequestException as e:
            self.print_test(name, False, f"Error: {str(e)}")
            return False

    def test_visit_counted(self, identifier: str) -> bool:
        """Test that the redirect was counted."""
        try:
            response = self.session.get(f"{self.base_url}/api/resources/{identifier}", timeout=5)

            if response.status_code == 200:
                count = response.json().get("visit_count", 0)
                self.print_test("Visit Counted", count >= 1, f"Visit count: {count}")
                return count >= 1

            self.print_test("Visit Counted", False, f"Status: {response.status_code}")
            return False
        except requests.RequestException as e:
            self.print_test("Visit Counted", False, f"Error: {str(e)}")
            return False

    def test_alias_shared_across_kinds(self, alias: str) -> bool:
        """Test that a link alias cannot be reused by a file."""
        try:
            response = self.session.post(
                f"{self.base_url}/api/files",
                json={
                    "blob_location": "https://blobs.example.com/uploads/dup.txt",
                    "file_name": "dup.txt",
                    "size_bytes": 1,
                    "alias": alias,
                },
                timeout=5
            )
            return self.expect_status("Alias Shared Across Kinds", response, 409)
        except requests.RequestException as e:
            self.print_test("Alias Shared Across Kinds", False, f"Error: {str(e)}")
            return False

    def test_rejected_creation(self, name: str, payload: dict) -> bool:
        """Test that an invalid creation request is rejected."""
        try:
            response = self.session.post(f"{self.base_url}/api/links", json=payload, timeout=5)
            return self.expect_status(name, response, 400)
        except requests.RequestException as e:
            self.print_test(name, False, f"Error: {str(e)}")
            return False

    def test_nonexistent_identifier(self) -> bool:
        """Test resolving an unknown identifier."""
        try:
            response = self.session.get(
                f"{self.base_url}/nonexistent{self.run_tag}",
                allow_redirects=False,
                timeout=5
            )
            return self.expect_status("Non-existent Identifier", response, 404)
        except requests.RequestException as e:
            self.print_test("Non-existent Identifier", False, f"Error: {str(e)}")
            return False

    def test_stats_endpoint(self) -> bool:
        """Test stats endpoint."""
        try:
            response = self.session.get(f"{self.base_url}/api/stats", timeout=5)

            if response.status_code == 200:
                data = response.json()
                has_stats = "total_links" in data and "total_files" in data
                details = f"Links: {data.get('total_links', 'N/A')}, Files: {data.get('total_files', 'N/A')}"
                self.print_test("Stats Endpoint", has_stats, details)
                return has_stats
            else:
                self.print_test("Stats Endpoint", False, f"Status: {response.status_code}")
                return False
        except requests.RequestException as e:
            self.print_test("Stats Endpoint", False, f"Error: {str(e)}")
            return False

    def run_all_tests(self) -> bool:
        """Run all validation tests."""
        self.print_header("Short Links Service Validation")
        print(f"Testing service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")

        # Basic connectivity
        if not self.test_health_check():
            print("\n❌ Health check failed. Service may not be running.")
            print(f"   Make sure the service is accessible at {self.base_url}")
            return False

        print()

        # Core functionality tests
        link = self.test_create_link()
        if link:
            self.test_redirect(str(link["id"]))
            self.test_visit_counted(str(link["id"]))

        file_asset = self.test_register_file()
        if file_asset:
            self.test_redirect(str(file_asset["id"]), name="File Redirect")

        print()

        # Alias tests
        alias = f"check-{self.run_tag}"
        if self.test_create_link(alias=alias):
            self.test_redirect(alias, name="Alias Redirect")
            self.test_alias_shared_across_kinds(alias)

        self.test_rejected_creation("Reserved Alias Rejection", {"url": "https://example.com", "alias": "admin"})
        self.test_rejected_creation("Numeric Alias Rejection", {"url": "https://example.com", "alias": "12345"})
        self.test_rejected_creation("Invalid URL Rejection", {"url": "not-a-valid-url"})
        self.test_nonexistent_identifier()

        print()

        # Additional endpoints
        self.test_stats_endpoint()

        # Print summary
        self.print_summary()

        # Return overall success
        return all(passed for _, passed in self.test_results)

    def print_summary(self):
        """Print test summary."""
        total = len(self.test_results)
        passed = sum(1 for _, p in self.test_results if p)
        failed = total - passed

        self.print_header("Test Summary")
        print(f"Total Tests:  {total}")
        print(f"✅ Passed:     {passed}")
        print(f"❌ Failed:     {failed}")
        print(f"Success Rate: {(passed/total*100):.1f}%")

        if failed > 0:
            print("\n⚠️  Failed tests:")
            for name, passed in self.test_results:
                if not passed:
                    print(f"   - {name}")

        print()


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Validate short links service functionality"
    )
    parser.add_argument(
        "--url",
        default="http://localhost:9200",
        help="Base URL of the service (default: http://localhost:9200)"
    )

    args = parser.parse_args()

    validator = ServiceValidator(args.url)

    try:
        success = validator.run_all_tests()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\n⚠️  Validation interrupted by user")
        sys.exit(2)


if __name__ == "__main__":
    main()
