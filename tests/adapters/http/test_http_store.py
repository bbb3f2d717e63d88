import pytest
import requests

from compcache.adapters.http_store import HttpGlobalStore
from compcache.kernel.components import FAIL, ComponentNotFound, NotInCache, component_module_id
from compcache.kernel.manager import ComponentManager
from tests.kernel.mocks import MockComponentProvider

BASE_URL = "http://repo.example.com/cache"
ARTIFACT_URL = f"{BASE_URL}/org/compcache/compiler-bridge/1.0/compiler-bridge-1.0.jar"

# --- Fixtures ---

@pytest.fixture
def download_dir(tmp_path):
    return tmp_path / "downloads"

@pytest.fixture
def store(download_dir):
    return HttpGlobalStore(base_url=BASE_URL + "/", download_dir=download_dir)

@pytest.fixture
def module_id():
    return component_module_id("compiler-bridge", revision="1.0")


# --- Tests ---

def test_store_requires_base_url(download_dir):
    with pytest.raises(ValueError, match="base_url cannot be empty"):
        HttpGlobalStore(base_url="", download_dir=download_dir)


def test_url_follows_repository_layout(store, module_id):
    assert store.url_for(module_id) == ARTIFACT_URL


def test_lock_file_lives_in_download_dir(store, download_dir):
    assert store.lock_file == download_dir / "global.lock"


def test_fetch_downloads_artifact(store, module_id, download_dir, requests_mock):
    requests_mock.get(ARTIFACT_URL, content=b"bridge bytes")

    path = store.fetch(module_id)

    assert path.read_bytes() == b"bridge bytes"
    assert path.name == "compiler-bridge-1.0.jar"
    assert download_dir in path.parents
    assert not list(path.parent.glob("*.tmp"))


def test_fetch_missing_raises_not_in_cache(store, module_id, requests_mock):
    requests_mock.get(ARTIFACT_URL, status_code=404)

    with pytest.raises(NotInCache):
        store.fetch(module_id)


def test_fetch_server_error_raises_http_error(store, module_id, requests_mock):
    requests_mock.get(ARTIFACT_URL, status_code=500)

    with pytest.raises(requests.exceptions.HTTPError):
        store.fetch(module_id)


def test_fetch_network_error_leaves_no_partial_file(store, module_id, requests_mock):
    requests_mock.get(ARTIFACT_URL, exc=requests.exceptions.ConnectionError("Network error"))

    with pytest.raises(requests.exceptions.ConnectionError):
        store.fetch(module_id)
    assert not store._target_path(module_id).exists()


def test_publish_uploads_file(store, module_id, make_files, requests_mock):
    (source,) = make_files("bridge.jar")
    requests_mock.put(ARTIFACT_URL, status_code=201)

    store.publish(module_id, source)

    assert requests_mock.call_count == 1
    assert requests_mock.last_request.method == "PUT"


def test_publish_failure_raises(store, module_id, make_files, requests_mock):
    (source,) = make_files("bridge.jar")
    requests_mock.put(ARTIFACT_URL, status_code=403)

    with pytest.raises(requests.exceptions.HTTPError):
        store.publish(module_id, source)


def test_remove_deletes_remote_and_download(store, module_id, requests_mock):
    requests_mock.get(ARTIFACT_URL, content=b"bridge bytes")
    requests_mock.delete(ARTIFACT_URL, status_code=204)
    path = store.fetch(module_id)

    store.remove(module_id)

    assert requests_mock.last_request.method == "DELETE"
    assert not path.exists()


def test_remove_missing_is_tolerated(store, module_id, requests_mock):
    requests_mock.delete(ARTIFACT_URL, status_code=404)
    store.remove(module_id)


# --- With the component manager ---

def test_manager_pulls_from_http_store(store, lock_dir, requests_mock):
    requests_mock.get(ARTIFACT_URL, content=b"bridge bytes")
    provider = MockComponentProvider(lock_file=lock_dir / "local.lock")
    manager = ComponentManager(provider=provider, global_store=store, revision="1.0")

    (path,) = manager.files("compiler-bridge", FAIL)

    assert path.read_bytes() == b"bridge bytes"


def test_manager_treats_unreachable_store_as_miss(store, lock_dir, requests_mock):
    requests_mock.get(ARTIFACT_URL, exc=requests.exceptions.ConnectionError("Network error"))
    provider = MockComponentProvider(lock_file=lock_dir / "local.lock")
    manager = ComponentManager(provider=provider, global_store=store, revision="1.0")

    with pytest.raises(ComponentNotFound):
        manager.files("compiler-bridge", FAIL)
