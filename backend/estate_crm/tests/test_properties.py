"""
Property listing tests.
"""
from typing import Any, Dict

import pytest

from .test_base import BaseAPITest


class TestPropertyManagement(BaseAPITest):
    """Test cases for property CRUD operations."""

    base_url = "/api/properties"

    def test_list_properties(self, client):
        data = self.assert_success_response(client.get(self.base_url))
        assert len(data["items"]) == 4
        assert data["items"][0]["imageUrl"].startswith("https://")

    def test_create_property_success(self, client, sample_property_data: Dict[str, Any]):
        created = self.assert_success_response(client.post(self.base_url, json=sample_property_data))
        assert created["id"]
        assert created["name"] == "Harbor View Condo"
        assert created["price"] == 640000
        assert created["imageUrl"] == sample_property_data["imageUrl"]
        assert created["status"] == "For Sale"

    def test_create_property_zero_price(self, client, sample_property_data: Dict[str, Any]):
        payload = {**sample_property_data, "price": 0}
        self.assert_validation_error(client.post(self.base_url, json=payload), "price")

    @pytest.mark.parametrize("price", ["NaN", "Infinity"])
    def test_create_property_non_finite_price(self, client, price, sample_property_data: Dict[str, Any]):
        payload = {**sample_property_data, "price": price}
        self.assert_validation_error(client.post(self.base_url, json=payload), "price")
        data = self.assert_success_response(client.get(self.base_url))
        assert len(data["items"]) == 4

    def test_update_property_non_finite_price(self, client):
        self.assert_validation_error(client.put(f"{self.base_url}/prop-1", json={"price": "Infinity"}), "price")

    def test_image_url_stored_as_submitted(self, client, sample_property_data: Dict[str, Any]):
        payload = {**sample_property_data, "imageUrl": "https://Example.com"}
        created = self.assert_success_response(client.post(self.base_url, json=payload))
        assert created["imageUrl"] == "https://Example.com"
        fetched = self.assert_success_response(client.get(f"{self.base_url}/{created['id']}"))
        assert fetched["imageUrl"] == "https://Example.com"

    def test_update_image_url_stored_as_submitted(self, client):
        data = self.assert_success_response(
            client.put(f"{self.base_url}/prop-2", json={"imageUrl": "https://Cdn.Homes.io/Pic.JPG"})
        )
        assert data["imageUrl"] == "https://Cdn.Homes.io/Pic.JPG"

    def test_create_property_invalid_image_url(self, client, sample_property_data: Dict[str, Any]):
        payload = {**sample_property_data, "imageUrl": "not a url"}
        self.assert_validation_error(client.post(self.base_url, json=payload), "imageUrl")

    def test_create_property_rejects_non_http_url(self, client, sample_property_data: Dict[str, Any]):
        payload = {**sample_property_data, "imageUrl": "ftp://files.homes.io/a.jpg"}
        self.assert_validation_error(client.post(self.base_url, json=payload), "imageUrl")

    def test_create_property_negative_bedrooms(self, client, sample_property_data: Dict[str, Any]):
        payload = {**sample_property_data, "bedrooms": -1}
        self.assert_validation_error(client.post(self.base_url, json=payload), "bedrooms")

    def test_create_property_short_address(self, client, sample_property_data: Dict[str, Any]):
        payload = {**sample_property_data, "address": "1 Rd"}
        self.assert_validation_error(client.post(self.base_url, json=payload), "address")

    def test_update_property_price(self, client):
        data = self.assert_success_response(client.put(f"{self.base_url}/prop-1", json={"price": 700000}))
        assert data["price"] == 700000
        assert data["name"] == "Modern Downtown Loft"
        assert data["status"] == "For Sale"

    def test_update_property_status(self, client):
        data = self.assert_success_response(client.put(f"{self.base_url}/prop-3", json={"status": "Sold"}))
        assert data["status"] == "Sold"

    def test_get_property_not_found(self, client):
        self.assert_not_found(client.get(f"{self.base_url}/missing"))

    def test_delete_property(self, client):
        self.assert_success_response(client.delete(f"{self.base_url}/prop-4"))
        data = self.assert_success_response(client.get(self.base_url))
        assert "prop-4" not in [p["id"] for p in data["items"]]

    def test_delete_property_not_found(self, client):
        self.assert_not_found(client.delete(f"{self.base_url}/missing"))
