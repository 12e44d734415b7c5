# gcpprovider

Data types, configuration loading and validation rules for the GCP
provider of a Kubernetes cluster manager.

The package describes the provider-specific documents that a cluster
description carries: cloud profile image mappings, infrastructure
networks, control-plane settings and worker pools. It reads and writes
them in their versioned form. It also checks them against the rules the
provider enforces before it acts on them.

## Installing

```
pip install .
pip install ".[test]"   # with pytest, to run the tests
```

## Modules

- `gcpprovider.types` holds the provider API objects as dataclasses.
  - Cloud profile: `CloudProfileConfig`, `MachineImages`,
    `MachineImageVersion`.
  - Infrastructure: `InfrastructureConfig`, `NetworkConfig`, `VPC`,
    `CloudRouter`, `CloudNAT`, `NatIPName`, `FlowLogs`.
  - Infrastructure status: `InfrastructureStatus`, `NetworkStatus`,
    `Subnet`, `NatIP`, and the `SubnetPurpose` enum (`NODES`,
    `INTERNAL`).
  - Control plane: `ControlPlaneConfig`, `CloudControllerManagerConfig`.
  - Workers: `WorkerConfig`, `Volume`, `ServiceAccount`, `WorkerStatus`,
    `MachineImage`.
  - `kind()` and `resource()` qualify a name with the API group, as a
    `(group, name)` pair.
- `gcpprovider.serialization` reads and writes these objects as
  documents of API version
  `gcp.provider.extensions.gardener.cloud/v1alpha1`.
  - `decode` accepts YAML or JSON, as bytes or text. It rejects unknown
    fields and duplicate keys.
  - `encode` writes compact JSON, leaving out optional fields that are
    unset.
  - `infrastructure_config_from_raw` and `cloud_profile_config_from_raw`
    decode the provider config sections of those resources.
  - Bad input raises `DecodeError`.
- `gcpprovider.helper` looks things up in these objects:
  `find_subnet_by_purpose`, `find_machine_image` and
  `find_image_from_cloud_profile`. Each raises `NotFoundError` (a
  `LookupError`) when nothing matches.
- `gcpprovider.config` holds the controller configuration.
  - `load` and `load_from_file` read a YAML document into a
    `ControllerConfiguration` with its `ETCD`, `ETCDStorage` and
    `ETCDBackup` settings. Errors raise `ConfigError`.
  - `Config` wraps a loaded configuration. It hands out copies through
    `options()`, `etcd_storage()`, `etcd_backup()` and
    `health_check_config(default)`.
  - `ConfigOptions` adds a `--config-file` option to an `argparse`
    parser with `add_arguments`. `complete()` loads the named file, and
    `completed()` returns the resulting `Config`.
- `gcpprovider.core` holds the cluster-level types the validation works
  on: `Worker`, `CoreVolume`, `DataVolume`, `Machine`,
  `ShootMachineImage`, `WorkerKubernetes`, `Networking`,
  `CoreMachineImage` and `ExpirableVersion`. It also has
  `find_worker_by_name`.
- `gcpprovider.field` describes validation errors.
  - A `Path` names a field, such as `spec.workers[0].zones`; build one
    with `child()` and `index()`.
  - A `FieldError` carries an `ErrorType`, the field name, the offending
    value and a detail message.
  - `required`, `invalid`, `not_supported`, `forbidden`, `duplicate`,
    `internal_error` and `validate_immutable_field` create these errors.
- `gcpprovider.cidr` checks CIDR ranges, each bound to the field path it
  came from.
  - `validate_cidr_parse` checks that a range parses.
  - `validate_cidr_is_canonical` checks that no host bits are set.
  - `CIDR.validate_not_overlap` and `CIDR.validate_subset` compare
    ranges with each other.
- `gcpprovider.validation` holds the validation rules, one module per
  subject:
  - `cloudprofile`: `validate_cloud_profile_config`
  - `controlplane`: `validate_control_plane_config`,
    `validate_control_plane_config_update`, `validate_feature_gates`
  - `infrastructure`: `validate_infrastructure_config`,
    `validate_infrastructure_config_update`
  - `secret`: `validate_cloud_provider_secret`,
    `extract_service_account_project_id`
  - `shoot`: `validate_networking`, `validate_workers`,
    `validate_workers_update`, `validate_worker_auto_scaling`
  - `worker`: `validate_worker_config`

## Validation results

Validators do not stop at the first problem. They return every problem
found as a list of `FieldError` values, and an empty list means the
input is valid.

```python
from gcpprovider.validation.worker import validate_worker_config
from gcpprovider.types import WorkerConfig, ServiceAccount

errors = validate_worker_config(
    WorkerConfig(service_account=ServiceAccount(email="", scopes=["scope-1"])),
    [],
)
for error in errors:
    print(error.type, error.field)   # Required value serviceAccount.email
    print(error)                     # field path plus message
```

Two checks have a single yes-or-no outcome, and they raise instead:

- `validate_cloud_provider_secret` raises `SecretValidationError`.
- `validate_worker_auto_scaling` raises `AutoScalingError`.

## Decoding provider documents

```python
from gcpprovider.serialization import decode, encode

infra = decode(b"""
apiVersion: gcp.provider.extensions.gardener.cloud/v1alpha1
kind: InfrastructureConfig
networks:
  workers: 10.250.0.0/16
""")
print(infra.networks.workers)
print(encode(infra))
```

## Loading the controller configuration

```python
from gcpprovider.config import load

cfg = load(b"""
apiVersion: gcp.provider.extensions.config.gardener.cloud/v1alpha1
kind: ControllerConfiguration
etcd:
  storage:
    className: gardener.cloud-fast
    capacity: 25Gi
  backup:
    schedule: "0 */24 * * *"
""")
print(cfg.etcd.storage.class_name)
```

An empty document gives an empty `ControllerConfiguration`. A document
that cannot be read raises `ConfigError`. The `clientConnection` and
`healthCheckConfig` sections are kept as plain mappings, without further
checks.

## Checking a service account secret

```python
from gcpprovider.validation.secret import validate_cloud_provider_secret

project_id = validate_cloud_provider_secret(
    {"serviceaccount.json": b'{"project_id": "my-project"}'}
)
```

The function returns the project ID. The project ID must start with a
lower-case letter and end with a letter or digit. It must be 6 to 30
characters long, using only lower-case letters, digits and hyphens.

## Limits

- This is a library only. It has no command, no controller that
  reconciles resources, and no webhook server.
- It does not talk to GCP or to a Kubernetes API server. It creates,
  deletes and reads no buckets, networks or machines.
- Feature gate checks use a fixed table of known gates in
  `gcpprovider.validation.controlplane`. A gate that is not in that
  table is reported as invalid.