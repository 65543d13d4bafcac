# gcstore

Models and helpers for working with Google Cloud Storage resources:

- **Locations**: the regions, multi-regions and dual-regions a bucket can
  use (`gcstore.location`).
- **Pub/Sub topics**: parsing and formatting notification topic names
  (`gcstore.topic`).
- **Service accounts**: loading credentials from the environment or from a
  JSON document (`gcstore.service_account`).
- **Signing responses**: decoding the answers of a remote signing endpoint
  (`gcstore.signature`).
- **HMAC keys**: the key and metadata resources, and the body of a state
  update (`gcstore.hmac_key`).
- **Objects**: the object resource, with V4 signed download and upload
  URLs (`gcstore.object`, `gcstore.signing`).
- **Requests**: compose, list and rewrite payloads
  (`gcstore.requests_model`).
- **Streams**: chunked reading of files and sized byte streams
  (`gcstore.streams`).

## What this package does not do

gcstore does not talk to the storage service. It has no HTTP client and
does not create, list, read, update or delete buckets, objects, access
controls or HMAC keys. It builds and parses the JSON bodies those calls use,
and signs URLs that other tools can then request.

## Installation

From a checkout of the project:

```
pip install .
```

## Credentials

`ServiceAccount.from_env` looks for credentials in this order:

1. `SERVICE_ACCOUNT`: the path to a credentials JSON file.
2. `GOOGLE_APPLICATION_CREDENTIALS`: the same.
3. `SERVICE_ACCOUNT_JSON`: the credentials JSON itself.
4. `GOOGLE_APPLICATION_CREDENTIALS_JSON`: the same.

When it is called without a mapping, a `.env` file is loaded first and the
process environment is used. `CredentialsError` is raised if none of the
variables is set, the file cannot be read, the JSON is invalid or lacks a
field, or the document's `type` is not `service_account`.

```python
from gcstore.service_account import ServiceAccount

account = ServiceAccount.from_env()
# or, from text you already have:
account = ServiceAccount.from_json(credentials_text)
```

## Signed URLs

```python
from gcstore.object import Object

obj = Object.from_dict(metadata_returned_by_the_api)
url = obj.download_url(300, service_account=account)
attachment = obj.download_url_with(300, content_disposition="attachment", service_account=account)
upload = obj.upload_url(300, service_account=account)
upload, headers = obj.upload_url_with(300, {"field": "value"}, service_account=account)
```

If `service_account` is left out, the credentials are loaded with
`ServiceAccount.from_env()`. A signed URL stays valid for at most 604800
seconds (seven days). Longer or negative durations raise
`gcstore.signing.SigningError`, and so does a private key that is not an RSA
key in PEM form. The headers that `upload_url_with` returns
(`x-goog-meta-<key>`) must be sent along with the `PUT` request. Every method
takes a `now` argument to fix the signing time; by default the current UTC
time is used.

The lower-level pieces (`sign_url`, `canonical_query_string`,
`canonical_request`, `credential_scope`, `percent_encode`,
`percent_encode_noslash` and `rsa_pkcs1_sha256`) live in `gcstore.signing`.

## HMAC keys

```python
from gcstore.hmac_key import HmacKey, HmacState, parse_hmac_list, update_request_body

key = HmacKey.from_dict(create_response)
print(key.metadata.access_id, key.metadata.state)
all_keys = parse_hmac_list(list_response)
body = update_request_body(HmacState.INACTIVE)  # {"state": "INACTIVE"}
```

## Listing, composing and rewriting

```python
from gcstore.requests_model import (
    ComposeRequest, ListRequest, ObjectList, Projection, RewriteResponse, SourceObject,
)

query = ListRequest(prefix="photos/", delimiter="/", projection=Projection.FULL).to_query()
page = ObjectList.from_dict(list_response)  # .items, .prefixes, .next_page_token

compose = ComposeRequest(source_objects=[SourceObject("part-1"), SourceObject("part-2")])
body = compose.to_dict()

rewritten = RewriteResponse.from_dict(rewrite_response).resource
```

`ListRequest.to_query` leaves out unset fields and raises `ValueError` for a
negative `max_results`.

## Locations and topics

```python
from gcstore.location import default_location, parse_location
from gcstore.topic import Topic

parse_location("EU")        # MultiRegion.EU
parse_location("US-EAST1")  # NALocation.SOUTH_CAROLINA
default_location()          # NALocation.SOUTH_CAROLINA

topic = Topic.parse("//pubsub.googleapis.com/projects/my-project/topics/uploads")
assert topic.to_json() == "//pubsub.googleapis.com/projects/my-project/topics/uploads"
```

Both `parse_location` and `Topic.parse` raise `ValueError` for input they do
not recognise.

## Streams

```python
from gcstore.streams import SizedByteStream, iter_chunks

with open("photo.png", "rb") as reader:
    for chunk in iter_chunks(reader):  # chunks of at most 8 KiB
        ...

stream = SizedByteStream(b"hello", size=5)
stream.size_hint()  # (5, 5)
bytes(stream)       # b"hello"
```

## Running the tests

```
pip install -e ".[test]"
pytest
```