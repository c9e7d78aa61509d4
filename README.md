# spotlink

Building blocks for a Spotify Connect receiver, written in plain Python:

- **Metadata models** for tracks, albums, artists, episodes, shows, lyrics and
  playlists, built from decoded messages held as mappings.
- **Playback checks** that decide whether an item can be played for a user in
  a given country, and pick cover image URLs.
- **Zeroconf discovery**: an HTTP endpoint that answers `getInfo` and
  `addUser` requests from clients on the local network, advertised over
  multicast DNS, which hands you the credentials the clients send.
- **Audio sinks** that write PCM data to standard output, to a file, or into
  the standard input of another program.

The only third-party dependency is `cryptography`, used to decrypt the
credential blob that clients send during discovery. Python 3.10 or later is
required.

```
pip install .            # the package
pip install .[test]      # with pytest, to run the tests
```

## Configuration values

`spotlink.config` parses the strings a command line would accept:

```python
from spotlink.config import AudioFormat, Bitrate, NormalisationType, VolumeCtrl

fmt = AudioFormat.parse("s24_3")     # case-insensitive
bytes_per_sample = fmt.size()        # 3

bitrate = Bitrate.parse("320")
norm = NormalisationType.parse("album")

volume = VolumeCtrl.parse("cubic", 45.0)
default_volume = VolumeCtrl.default()  # logarithmic, 60 dB range
```

An unknown value raises `ValueError`.

## Metadata

Every model has a `from_message` class method that takes a decoded message
(a mapping of field names to values; absent fields take their defaults) and
returns a dataclass. Item ids are the hex form of the 16-byte ids in the
message; dates become timezone-aware UTC `datetime` values.

```python
from spotlink.track import Track
from spotlink.album import Album

track = Track.from_message(track_message)
album = Album.from_message(album_message)

for track_id in album.tracks():
    print(track_id)
```

Artists know which release of each album is current:

```python
from spotlink.artist import Artist

artist = Artist.from_message(artist_message)
latest_albums = list(artist.albums_current())
top = artist.top_tracks.for_country("SE")   # falls back to the global list
```

Lyrics come as JSON and are parsed with `spotlink.lyrics.Lyrics.from_json`.
Country restrictions are stored as two-letter codes; `parse_country_codes`
from `spotlink.restriction` splits the packed form into a list.

Values that cannot be converted raise `spotlink.errors.InvalidMessageError`,
a subclass of `MetadataError`.

## Can this be played?

`spotlink.audio_item.AudioItem` turns a track or episode into something a
player can use. It raises `InvalidDurationError` for a duration of zero or
less and `ExplicitContentFilteredError` when explicit content is filtered,
and records release embargoes and country restrictions in `availability`
(`None` when playable, otherwise an `UnavailabilityReason`):

```python
from datetime import datetime, timezone
from spotlink.audio_item import AudioItem

item = AudioItem.from_track(
    track,
    "GB",
    {"catalogue": "premium"},
    False,
    datetime.now(timezone.utc),
)
print(item.uri, item.availability)
```

The lower-level checks are in `spotlink.availability`: `available`,
`allowed_for_user` and `available_for_user`. `spotlink.request` has
`build_metrics_uri` and `first_payload` for shaping metadata requests and
reading their responses.

## Playlists

```python
from spotlink.playlist.list import Playlist

playlist = Playlist.from_message(playlist_message, playlist_id)
print(playlist.name())
for track_id in playlist.tracks():
    print(track_id)
```

Diffs, operations, attributes, permissions and annotations have their own
models in the `spotlink.playlist` package.

## Discovery

`spotlink.discovery.service.Discovery` starts the HTTP endpoint, advertises it
as `_spotify-connect._tcp` over multicast DNS, and yields credentials each
time a client on the network selects this device. `keys` is your key-exchange
object: it must provide `public_key()` and `shared_secret(remote_key)`.

```python
from spotlink.discovery.service import Discovery

with (
    Discovery.builder(device_id, client_id, keys)
    .name("Living Room")
    .port(0)
    .launch()
) as discovery:
    credentials = discovery.next_credentials(timeout=60)
    print(credentials.username)
```

The server behind it, `spotlink.discovery.server.DiscoveryServer`, can also
be used on its own; `next_credentials(timeout)` raises `TimeoutError` when
nothing arrives in time. Call `close()` on either object when you are done.

## Audio output

Sinks are looked up by name in `spotlink.backend.registry`:

```python
from spotlink.backend.registry import backend_names, find
from spotlink.config import AudioFormat

print(backend_names())          # ['pipe', 'subprocess']
make_sink = find("subprocess")
sink = make_sink("aplay -f cd", AudioFormat.S16)

sink.start()
sink.write_bytes(pcm_bytes)
sink.write([0.0, 0.5, -0.5])    # samples are encoded in the sink's format
sink.stop()
```

- `pipe` writes to standard output, or to the file given as the device.
- `subprocess` starts the given command and feeds it through its standard
  input, restarting it once per write if a write fails.

Failures raise subclasses of `spotlink.backend.sink.SinkError`, such as
`NotConnectedError` or `OnWriteError`.

## What this package does not do

It does not log in to an account, open a session, or fetch metadata, lyrics
or audio from any server: you supply the decoded messages and the
key-exchange object yourself. It does not decode audio, and it has no player
and no command-line program.