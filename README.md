# oxideux

A pair of interactive terminal programs for copying the files of one
directory from one machine to another over TCP.

The **server** shares the files that sit directly inside a directory, its
*parity root*. The **client** connects to a server and downloads every one of
those files into its own parity root.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Usage

On the machine holding the files:

```
oxideux-server
```

On the machine that should receive them:

```
oxideux-client
```

Both commands accept `--config-root DIR` to keep their configuration in
`DIR` instead of the user's configuration directory.

Each program opens a menu. On the first screen you can:

- type a profile's number to select it;
- `a` — create a new profile (named `profile #N`, with the default settings);
- `r` — refresh the profile list;
- `c` — open the configuration directory in the system's file browser;
- `q` — quit.

With a profile selected you can:

- `s` — start the server or client (offered only when the profile has no errors);
- `cn` — rename the profile;
- `cr` — change the parity root;
- `cp` — change the port;
- `cm` (server) / `ci` (client) — change the mask or the IPv4 address;
- `erase` — delete the profile;
- `q` — go back.

After changing a value you are asked whether to save the profile.

The server listens on its mask and port until the program is interrupted,
answering one request per connection. The client downloads all of the
server's files, overwriting files of the same name in its parity root, and
then returns to the profile screen.

## Profiles

Profiles are kept as JSON in `oxideux/server_config.json` and
`oxideux/client_config.json` under the configuration directory. When a file
does not exist it is created with a `default` profile:

| Program | Parity root              | Port  | Address     |
|---------|--------------------------|-------|-------------|
| server  | `{home}/oxideux/source`  | 49160 | `0.0.0.0`   |
| client  | `{download}`             | 49160 | `localhost` |

A parity root may begin with one of these placeholders, which is replaced
when the profile is loaded or the parity root is changed: `~`, `{home}`,
`{config}`, `{appdata}`, `{download}`.

A profile can be started only when its parity root is an existing directory,
its port is between 1024 and 65535, and its address is `localhost` or four
dot-separated groups of one to three digits.

## Library use

- `oxideux.config.ServerProfileStore` and `oxideux.config.ClientProfileStore`
  read, create, save, rename and erase profiles; both take an optional
  configuration root.
- `oxideux.parity.get_file_entries` lists the files a server would share;
  `oxideux.parity.get_file_entry` describes a single file.
- `oxideux.connection.Connection` wraps a socket and sends and receives
  length-prefixed integers, strings, requests, results and files.
- `oxideux.request` defines `Request`, `RequestKind` and `RequestResult` and
  their binary encoding (`encode_request`, `decode_request`, `encode_result`,
  `decode_result`).
- `oxideux.server.handle_client` answers one request on a connection;
  `oxideux.server.serve` and `oxideux.client.run_client` run a whole server
  or client session for a profile.
- `oxideux.app.App` is the small state machine both menus are built on, and
  `oxideux.cli.InputOptions` is the menu prompt.

## Limitations

- The client only downloads all files; the protocol has requests for a file
  count and for a single file by index or name, but the client offers no way
  to send them.
- There is no upload, authentication or encryption.
- Only files directly inside the parity root are shared; subdirectories are
  skipped.
- File lengths are sent as 32-bit values, so files of 4 GiB or more are not
  transferred correctly.
- The server handles one connection at a time.