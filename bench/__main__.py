from .bench_resolver import bench_resolver


def main():
    print('Benchmarking PermissionResolver.resolve.')
    bench_resolver()


main()
