from block_drop.visualization.human_play import main

if __name__ == "__main__":  # pragma: no cover
    main()
