GAS_COIN_TYPE = '0x2::sui::SUI'

SUI_FRAMEWORK_ADDRESS = '0x2'

# Well-known mainnet address holding many coin types
DEFAULT_PROBE_OWNER = '0xb871a42470b59c7184033a688f883cf24eb5e66eae1db62319bab27adb30d031'

# Sender used for dev-inspect calls, which need no funded account
DEV_INSPECT_SENDER = '0x7777777777777777777777777777777777777777777777777777777777777777'

SUI_ADDRESS_LENGTH = 32

RPC_ENDPOINTS = {
    'mainnet': [
        'https://fullnode.mainnet.sui.io:443',
        'https://mainnet.suiet.app',
        'https://rpc-mainnet.suiscan.xyz',
        'https://mainnet.sui.rpcpool.com',
        'https://sui-mainnet.nodeinfra.com',
        'https://mainnet-rpc.sui.chainbase.online',
        'https://sui-mainnet-ca-1.cosmostation.io',
        'https://sui-mainnet-us-1.cosmostation.io',
        'https://sui-mainnet-endpoint.blockvision.org',
        'https://sui1mainnet-rpc.chainode.tech',
        'https://sui-rpc.publicnode.com',
    ],
    'testnet': [
        'https://fullnode.testnet.sui.io:443',
        'https://rpc-testnet.suiscan.xyz',
        'https://sui-testnet-endpoint.blockvision.org',
        'https://testnet.suiet.app',
    ],
    'devnet': [
        'https://fullnode.devnet.sui.io:443',
    ],
    'localnet': [
        'http://127.0.0.1:9000',
    ],
}
